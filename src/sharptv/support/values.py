"""
Equality and printing for the settings objects, which are compared and logged by their attributes.
"""


class ValueObject:
    """ equal to another instance of the same type holding equal attributes. """

    def __eq__(self, other):
        return type(other) is type(self) and vars(other) == vars(self)

    def __repr__(self):
        fields = ', '.join('%s=%r' % item for item in sorted(vars(self).items()))
        return '%s(%s)' % (type(self).__name__, fields)
