import logging
import os
import platform

from configobj import ConfigObj, ConfigObjError, Section, flatten_errors
from validate import Validator

logger = logging.getLogger(__name__)

# The default extension for configuration files
config_extension = '.cfg'


def config_flavor(name, flavor=None):
    configname = name if not flavor else name + '.' + flavor
    return configname


def config_filename(name, directory=None):
    """
    Determines the location of a config file in the given directory.
    """
    return os.path.join(directory or '', name + config_extension)


def load_config_file_base(file, must_exist=True):
    """
    Loads a configuration file
    :param file:        The configuration file to load
    :param must_exist:  when True, the file must exist or an exception is thrown.
    :return: The ConfigObj instance for the file.
    """
    try:
        return ConfigObj(file, interpolation='Template', file_error=must_exist) \
            if must_exist or os.path.exists(file) else ConfigObj()
    except ConfigObjError as e:
        raise type(e)(str(e) + ' at ' + file)


def config_flavor_file(name, directory, subpart=None) -> ConfigObj:
    """
    Loads a specialization of a config file. The configuration file is expected to be named
    after the base, followed by a period and then the specialization, if the specialization is given,
    otherwise just the base name. A missing file gives an empty configuration.
    :param name:    The name of the base configuration
    :param subpart: The name of the specialization.
    :return: The ConfigObj for the configuration file.
    """
    configname = config_flavor(name, subpart)
    file = config_filename(configname, directory)
    return load_config_file_base(file, False)


def load_schema(name, directory) -> ConfigObj:
    """
    Loads the schema specialization as a configspec. Check arguments such as integer(min=1, max=8) are kept
    whole rather than split into lists at the commas.
    """
    file = config_filename(config_flavor(name, 'schema'), directory)
    try:
        return ConfigObj(file, _inspec=True, file_error=True)
    except ConfigObjError as e:
        raise type(e)(str(e) + ' at ' + file)


def map_os_name(name):
    """
    >>> map_os_name('Windows')
    'windows'
    >>> map_os_name("Darwin")
    'osx'
    """
    name = name.lower()
    if name == 'darwin':
        name = 'osx'
    return name


def os_name():
    return map_os_name(platform.system())


def user_config_file(name):
    return os.path.expanduser('~/' + name + config_extension)


def describe_errors(config, result):
    """
    Lists the validation failures in a result from ConfigObj.validate() as readable strings.
    """
    errors = []
    for section_list, key, error in flatten_errors(config, result):
        section = '.'.join(section_list) or 'root'
        if key is None:
            errors.append("section '%s' is missing" % section)
        else:
            errors.append("'%s' in section '%s': %s" % (key, section, error or 'missing value'))
    return errors


def load_config(name, directory, filename=None):
    """
        Loads all the configuration files that relate to the given name.
        Configurations are loaded in this order, later values overriding earlier ones:
        - the default specialization
        - the platform specialization
        - the user configuration in the home directory
        - the given file, which must exist
        The configurations are flattened into a single configuration, and then validated
        against the schema specialization.
    :param directory: the location of the default, platform and schema files
    :param filename: an explicit configuration file
    :return: the validated configuration
    """
    default_config = config_flavor_file(name, directory, 'default')
    platform_config = config_flavor_file(name, directory, os_name())
    user_config = load_config_file_base(user_config_file(name), must_exist=False)
    config = ConfigObj()
    config.merge(default_config)
    config.merge(platform_config)
    config.merge(user_config)
    if filename:
        logger.info("loading configuration from %s", filename)
        config.merge(load_config_file_base(filename))

    config.configspec = load_schema(name, directory)
    validator = Validator()
    result = config.validate(validator, preserve_errors=True)
    if result is not True:
        raise ConfigObjError("the config file %s failed validation: %s" %
                             (name, '; '.join(describe_errors(config, result))))
    return config


def fetch_conf_path(conf: Section, path):
    """
    Retrieves the named configuration section
    :param conf:        The root configuration
    :param path:        An iterable that lists the names of the config to resolve
    :return: The configuration object identified by the path, or None.
    """
    for p in path:    # lookup specific section
        conf = conf.get(p, None)
        if conf is None:
            return
    return conf


def apply_conf(conf: Section, target):
    """
    Applies the scalar values contained in a configuration section to a target object.
    It does this by iterating over the items in the configuration and setting any attributes with the same name.
    """
    for k, v in conf.items():
        if k in conf.scalars and hasattr(target, k):
            setattr(target, k, v)
