from rich.pretty import pprint

from argosy import *

parser = Parser.from_argv(description="Repeat a few numbers, for demonstration.")
parser.add_option(["-h", "--help"], "help", descr="show this help and exit")
parser.add_option(["-v", "--verbose"], "verbose", descr="dump the parsed arguments")
parser.add_option(["-s", "--scale"], "scale", ValueType.FLOAT, descr="factor applied to every number")
parser.add_positional("count", ValueType.INTEGER, descr="how many times each number is repeated")
parser.add_positional("numbers", ValueType.INTEGER, VARIABLE, descr="the numbers to repeat")


if __name__ == '__main__':
    parser.parse()
    if parser.get("verbose", False):
        parser.print_status()
        pprint(parser)
    scale = parser.get("scale", 1.0)
    for number in parser.getall("numbers"):
        print(*[number * scale] * parser.get("count"))
