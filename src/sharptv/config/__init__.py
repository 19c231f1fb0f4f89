"""
Configuration files for the television connection.

Settings are layered: the defaults shipped with the package, a platform specialization, the user's
~/sharptv.cfg and finally a file named on the command line. The merged result is validated against
sharptv.schema.cfg.
"""
