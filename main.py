import sys

from rich.console import Console
from rich.pretty import pprint

from argbind import *

speedy = Bool()
consent = Bool(True)
cakes = Int32()
fraction = Float32(1.0)
name = String("Cakeman")
required = Optional(Int32)

parser = Parser()
parser.flag(speedy, "s", "enable-speedy-mode", "This is a flag.")
parser.option(consent, Unset, "consent", "Whether you consent.")
parser.option(cakes, "n", "num-cakes", "The number of cakes.")
parser.option(fraction, "f", Unset, "The fraction of cakes.")
parser.option(name, Unset, "cake-name", "Name your cake.")
parser.option(required, "r", "required", "This one is mandatory.")

description = "My test program: Demonstrates example usage."


if __name__ == '__main__':
    stderr = Console(stderr=True)

    if not parser.parse(sys.argv):
        parser.printhelp(description, console=stderr)
        sys.exit(1)

    if not required.hasvalue:
        report(MissingParameterError('oops, need to specify "--required"', prog=parser.invokename, title="missing required argument"))
        parser.printhelp(description, console=stderr)
        sys.exit(1)

    pprint({
        "enable-speedy-mode": speedy.value,
        "consent": consent.value,
        "num-cakes": cakes.value,
        "fraction": fraction.value,
        "cake-name": name.value,
        "required": required.value,
    })
