import sys
from types import SimpleNamespace

from rich.pretty import pprint

from getoptic import *
from getoptic.handlers import *

__prog__ = "ic"


def main(argv=None):
    settings = SimpleNamespace(verbose=False, version=False, output="", input="", libdirs=[], files=[])

    parser = Parser((
        Option("v", "verbose", Arity.NONE, store_true(settings, "verbose"), descr="chatty output on stderr"),
        Option("V?", "version", Arity.NONE, store_true(settings, "version"), descr="show version number"),
        Option("o", "output", Arity.OPTIONAL, store_or(settings, "output", "stdout"), "FILE", "output FILE"),
        Option("c", (), Arity.OPTIONAL, store_or(settings, "input", "stdin"), "FILE", "input FILE"),
        Option("L", "libdir", Arity.REQUIRED, append(settings.libdirs), "DIR", "library directory"),
    ), append(settings.files))

    try:
        parser.run(sys.argv[1:] if argv is None else argv)
    except ParseError as error:
        return report(error, parser=parser, header="Usage: ic [OPTION...] files...")

    pprint(settings)
    return 0


if __name__ == '__main__':
    sys.exit(main())
