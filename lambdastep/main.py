"""Uses the lambdastep core to reduce a program read from a file or from the command line, or runs the interactive
shell. Also uses error handling context manager. Called from the lambdastep console script.
"""

import argparse

from termcolor import colored

from lambdastep.lang.error import ErrorHandler
from lambdastep.lang.session import Session
from lambdastep.lang.shell import Shell
from lambdastep.pure.reduction import NormalOrderReducer


def build_parser():
    parser = argparse.ArgumentParser(prog="lambdastep", description="Normal-order λ-calculus reducer.")
    parser.add_argument("file", help="file to reduce (if empty and no -e, goes to command-line mode)", nargs="?")
    parser.add_argument("-e", "--expr", help="program to reduce, given inline")
    parser.add_argument("--prefix", action="store_true", help="read and print terms in prefix notation (no macros)")
    parser.add_argument("--trace", action="store_true", help="print the term after every step")
    parser.add_argument("--max-steps", type=int, default=NormalOrderReducer.STEP_LIMIT,
                        help="give up after this many steps (default: %(default)s)")
    parser.add_argument("--numerals", action="store_true", help="print Church numerals as digits")
    parser.add_argument("--no-labels", dest="labels", action="store_false",
                        help="do not print sub-terms matching a macro by the macro's name")
    return parser


def main(argv=None):
    """Runs lambdastep. Called from the lambdastep console script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler() as error_handler:
        if args.file is None and args.expr is None:
            sess = Session(error_handler, Session.SH_FILE, prefix=args.prefix)
            error_handler.fatal = False
            Shell(sess, numerals=args.numerals, labels=args.labels).cmdloop()
            return

        if args.expr is not None:
            sess = Session(error_handler, "<expr>", prefix=args.prefix)
            sess.load(args.expr)
        else:
            sess = Session(error_handler, args.file, prefix=args.prefix)
            sess.read()

        sess.run(args.max_steps)

        if args.trace:
            for rule, expr in sess.steps:
                print(colored(f"{rule} ", attrs=["bold"]) + expr)

        print(sess.display(labels=args.labels, numerals=args.numerals))


if __name__ == "__main__":
    main()
