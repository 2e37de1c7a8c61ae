import sys

from rich.pretty import pprint
from rich.console import Console

from argotree import *


if __name__ == '__main__':
    source = sys.argv[1] if len(sys.argv) > 1 else '/Name:123 --Parameter="abc XYZ" -sUtZ file.txt'
    try:
        tree = parse(source)
    except ParseError as error:
        trigger(error, shell=True, fancy=True)
    else:
        Console().print(tree)
        pprint(tree)
