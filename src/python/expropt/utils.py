import numpy as np


UINT_BITS = 64
UINT_MAX = (1 << UINT_BITS) - 1


class KRecord:
    """
    A smoother namedtuple -- like https://pythonhosted.org/pyrecord but using the existing class syntax.
    Like a 3.7 dataclass, but don't need to decorate each derived class

    Derive a class from KRecord, declare its fields, and use keyword args in __init__

    def MyClass(KRecord):
        value: int
        names: List[String]

        def __init__(value, names):
            super().__init__(value=value, names=names)

    And now you have a nice little record class.

    Compare two MyClasses
        if a == b: ...
    """

    def __init__(self, **args):
        for (nt, v) in args.items():
            setattr(self, nt, v)

    def __eq__(self, that):
        if type(self) != type(that):
            return False

        for nt in type(self).__annotations__:
            if getattr(self, nt) != getattr(that, nt):
                return False
        return True


def singleton(cls):
    """ Simple decorator that makes a single instance of a class.
        @singleton
        class Foo:
            def do_foo(self):
                .....
        Foo.do_foo()
    """
    return cls()


def wrapping_add(a: int, b: int) -> int:
    """ Unsigned addition modulo 2**UINT_BITS: (UINT_MAX + 1) wraps to 0 rather than overflowing. """
    with np.errstate(over="ignore"):
        return int(np.uint64(a) + np.uint64(b))
