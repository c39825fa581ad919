# parteescript

A lexer and parser for the Partee scripting language, whose scripts are
stored in `.par` files. The lexer turns source text into tokens, the Pratt
parser turns those tokens into a syntax tree, and the tree can be printed as
an indented, colour-coded outline.

## Installing

```
pip install .
```

## Command line

```
parteescript exampleCode.par
```

The script argument is optional and defaults to `exampleCode.par`. The
command loads the script, tokenizes and parses it, and prints the syntax tree
to standard output when parsing finished without errors. Parse errors are
reported on standard error. If the script cannot be found, the command
prints a message on standard error and exits with status 1.

The script is looked up as given, relative to the current directory, in a
`src/` directory beneath it, and in the current directory and up to five of
its parents (each also with its `src/` directory).

## Library use

```python
from parteescript.lexer import Lexer
from parteescript.parser import Parser
from parteescript.syntax_tree import format_ast, print_ast
from parteescript.loader import load_script

source = load_script("exampleCode.par")
tokens = Lexer(source).tokenize()
result = Parser().parse(tokens)

if result.ok:
    print_ast(result.program)
else:
    print(result.message)
```

`Parser.parse` accepts any iterable of tokens, so a `Lexer` can be passed
directly: `Parser().parse(Lexer(source))`. Diagnostics go to standard error
unless a stream is given: `Parser(error_stream=some_stream)`.

`ParseResult` has three fields:

- `program`: the parsed `Program`, or `None` when there were no statements;
- `ok`: `True` only when no parse error was reported;
- `message`: `"Failed to parse program"` for an empty input, otherwise `None`.

When errors occur, the tree still holds `ErrorExpr` nodes (with `message`,
`row` and `column`) where parsing failed; the parser then skips ahead past
the next `end` keyword and carries on.

### Modules

- `parteescript.lexer`: `TokenType`, `Token` (`type`, `value`, `line`,
  `column`), `Lexer` (`next_token`, `tokenize`, iteration) and
  `token_type_name`.
- `parteescript.syntax_tree`: the node classes (`Program`, `BinaryExpr`,
  `IfExpr`, `FunctionExpr`, ...), `infix_binding_power`, `format_ast`
  (returns the outline as a string) and `print_ast` (writes it to standard
  output or a given `file`).
- `parteescript.parser`: `Parser`, `ParseResult` and `ParsingContext`.
- `parteescript.loader`: `load_script`, which raises `FileNotFoundError`
  when no candidate location holds a readable file.
- `parteescript.cli`: `main`, the command-line entry point.

## Language at a glance

```
use "graphics"

function add(a, b)
    return a + b
end

on keyPressed { key }
    if key == "space"
        jump()
    else
        idle()
    end
end

for item in [1, 2, 3]
    print(item ** 2)
end
```

Comments start with `#` and run to the end of the line. Strings may use
single or double quotes and support `\n`, `\t`, `\r`, `\\` and `\"` escapes;
any other escaped character stands for itself. `return` is only accepted
inside a function, `break` and `continue` only inside a loop.

## What it does not do

The package only reads and parses scripts; it does not evaluate or run
them. The `match` keyword is recognised by the lexer, but the parser reports
it as an error because switch statements are not supported.