from rich.pretty import pprint

from schemargs import *

__prog__ = "git"

git = subcommands({
    "add": CommandSchema("git add", "Add file contents to the index", {
        "files": Argument(String().array(), position=..., descr="files to add"),
        "all": Argument(Boolean().default(False), short="A", descr="add changes from all tracked and untracked files"),
    }),
    "commit": CommandSchema("git commit", "Record changes to the repository", {
        "message": Argument(String(), short="m", descr="commit message"),
        "amend": Argument(Boolean().default(False), descr="amend the previous commit"),
    }),
    "log": CommandSchema("git log", "Show commit logs", {
        "count": Argument(Number().default(10), short="n", descr="number of commits"),
        "format": Argument(Enum("oneline", "short", "full").default("short"), descr="output format"),
    }),
}, name="git", descr="Git command line tool", default="log")


def callback(data, command):
    pprint({"command": command} | data)


if __name__ == '__main__':
    run(git, on_success=callback, fancy=True)
