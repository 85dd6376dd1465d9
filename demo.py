"""
Engine Error Demo

Prints one diagnostic for every error the evaluator can raise, first
with terminal colors and then as plain text.
"""
import sys
sys.path.insert(0, '.')
from engine import Val, VARIANTS, ErrorKind, report, get_highlighter
from engine import errors as E


def sample_errors():
    x, y = Val.integer(1), Val.string('a')
    for kind in ErrorKind:
        cls = VARIANTS[kind]
        if issubclass(cls, E.InvalidBinaryOperation):
            yield cls(x, y)
        elif issubclass(cls, E.InvalidUnaryOperation):
            yield cls(y)
        elif issubclass(cls, E.ScopeResolutionError):
            yield cls('counter')
        elif cls is E.MismatchedParameterCount:
            yield cls(actual=1, expected=3)
        elif cls is E.MismatchedTypes:
            yield cls(actual=y, expected=Val.integer(0))
        else:
            yield cls()


def main():
    print('=== Engine Errors (color) ===')
    for err in sample_errors():
        report(err, file=sys.stdout)

    print()
    print('=== Engine Errors (plain) ===')
    plain = get_highlighter(color=False)
    for err in sample_errors():
        report(err, file=sys.stdout, highlighter=plain)


if __name__ == '__main__':
    main()
