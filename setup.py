"""
Packaging for sharptv-connector-py.

Tests sit beside the modules they test, named *_test.py. Install the test extra and run them with pytest:

    pip install -e .[test]
    pytest
"""

from setuptools import setup

setup(
    name='sharptv-connector-py',
    version='0.1.0',
    description='Serial control of televisions that answer each command with a single line.',
    url='',
    author='',
    author_email='',
    license='LGPL',
    python_requires='>=3.8',
    package_dir={'': 'src'},
    packages=['sharptv', 'sharptv.conduit', 'sharptv.config', 'sharptv.protocol', 'sharptv.support'],
    package_data={'sharptv.config': ['*.cfg']},
    install_requires=[
        'pyserial>=3.4',
        'configobj>=5.0.6',
    ],
    extras_require={
        'test': [
            'pytest',
            'PyHamcrest>=2.0',
            'timeout-decorator',
        ],
    },
    entry_points={
        'console_scripts': [
            'sharptv = sharptv.cli:main',
        ],
    },
    zip_safe=False,
)
