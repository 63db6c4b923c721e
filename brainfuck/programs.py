"""
Bundled sample programs.

HELLO_WORLD is the well-known nested-loop construction that prints
"Hello World!" followed by a newline. The rest are the small byte
functions used to show the language off: read a byte, transform it,
write it back.
"""

from typing import Dict

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

# f(x) = x + 1
INCREMENT = ",+."

# f(x) = 2*x
DOUBLE = ",[->++<]>."

# Copy input to output until end of input (which reads as 0)
ECHO = ",[.,]"

# Zero the current cell
CLEAR = "[-]"

PROGRAMS: Dict[str, str] = {
    "hello": HELLO_WORLD,
    "increment": INCREMENT,
    "double": DOUBLE,
    "echo": ECHO,
    "clear": CLEAR,
}


def get_program(name: str) -> str:
    try:
        return PROGRAMS[name]
    except KeyError:
        raise KeyError(f"Unknown example {name!r}; choose from {', '.join(sorted(PROGRAMS))}") from None
