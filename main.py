from rich.pretty import pprint

from argosy import *
from argosy.conventions import apply, help_option, version_option, response_files, subcommands
from argosy.faults import report
from argosy.helpers import render_help
from argosy.logging import setup_logging

__prog__ = "git"

git = Command("git", descr="the stupid content tracker")
git.option("--verbose", "-v", arity="none", inherited=True, descr="be more talkative")
git.option("-C", metavar="PATH", descr="run as if started in PATH")

push = Command("push", aliases=("p",), descr="update remote refs")
push.option("--force", "-f", arity="none", descr="force updates")
push.option("--push-option", "-o", arity="multiple", metavar="OPTION")
push.operand("remote", default="origin")
push.operand("refspecs", arity="multiple")

pull = Command("pull", descr="fetch from and integrate with another repository")
pull.option("--depth", type=int, metavar="DEPTH")

remote = Command("remote", descr="manage set of tracked repositories")
add = Command("add", descr="add a remote")
add.operand("name", required=True)
add.operand("url", required=True)


if __name__ == '__main__':
    setup_logging()
    tree, config = apply(
        git,
        ParserConfig(unrecognized_argument_handling="collect"),
        help_option(),
        version_option("2.47.0"),
        response_files(),
        subcommands({(): [push, pull, remote], ("remote",): [add]}),
    )
    try:
        result = Parser(tree, config).parse()
    except ParseException as exception:
        report(exception)
        raise SystemExit(1)
    except ParseExit as exit:
        report(exit)
        raise SystemExit(1)

    if result.terminator is not None and result.terminator.long == "help":
        render_help(result.command)
    else:
        pprint(result)
