import os
import sys

from argot import *

__prog__ = "cli-multi"

counter = Slot(SlotKind.UINT32, default=3)
ratio = Slot(SlotKind.FLOAT32, default=0.0)
user = Slot(SlotKind.TEXT, default=os.environ.get("USER", ""))
first = Slot(SlotKind.INT32)
second = Slot(SlotKind.INT32)


@command("Say Hi to the user")
def greet():
    print(f"Hello {user.value!r}")


@command("Print n numbers")
def count():
    for index in range(counter.value):
        print(f" - {index}")


@command("Add numbers", arguments=[
    Argument("arg1", "1st argument", into=first),
    Argument("arg2", "2nd argument", into=second),
])
def add():
    print(f"{first.value} + {second.value} = {first.value + second.value}")


parser = Parser(
    Command(
        "Multi action example",
        options=[
            help_option(),
            version_option(__prog__, Version(0, 0, 1, "dev")),
            Option("i", "listCounter", descr="Listing size", into=counter),
            Option("fOption", descr="Floating point value for the demo", into=ratio),
            Option("u", "name", descr="Greet user name", into=user),
        ],
        commands={
            "greet-1": greet,
            "count": count,
            "add": add,
        },
    ),
    shell=True,
    colorful=True,
)


if __name__ == '__main__':
    sys.exit(invoke(parser))
