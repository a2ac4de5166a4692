# jagaimo

jagaimo reads a compact specification of a command-line interface and turns it
into plain Python objects: global attributes, alias rules, and the full set of
commands that the command rules expand to.

## The specification language

A specification starts with an optional attribute block and then lists rules:

```
#[
    no_help,
    no_version,
    nu_cmp,
    fish_cmp,
    root_name = "my_tool",
    derives(Debug, Clone),
]

o(add) = A
s(remote) = rmt

c { s(history) o(view) [ <i32> filter<String> colored query<String> ] }
c { s(history) o(list) [ max<u8> verbose tags<Vec<String>> ] }
c { [ <(String, f64)> size<Dimensions> show_all ] }
```

- Attributes: `no_help`, `no_version`, `nu_cmp`, `fish_cmp`,
  `ignore_naming_conventions`, `no_auto_alias`, `root_name = "..."` and
  `derives(...)`. Any other name is a parse error. Unless
  `ignore_naming_conventions` is given, the root name is converted to
  UpperCamelCase (`my_tool` becomes `MyTool`). The default derives are
  `Debug`, `PartialEq` and `Clone`.
- Alias rules: `s(name) = alias` for spaces, `o(name) = alias` for operations,
  `f(name) = alias` for flags.
- Command rules: `c { s(...) o(...) [ ... ] }`. The space and operation lists
  are optional and may hold several names separated by commas; the rule expands
  to one command for every space and operation pair. Inside the brackets, a
  bare name is a boolean flag, `name<Type>` is a flag taking a value, and
  `<Type>` gives the command's positional parameters. Flags and parameters are
  attached to the expanded commands only when both a space list and an
  operation list are given.
- Transform rules (`t { ... }`) are recognised but rejected with a
  `ParseError`.

Comments (`// ...` and `/* ... */`) and whitespace are ignored.

## Command line

```
jagaimo path/to/spec.txt
jagaimo --root-name my_tool path/to/spec.txt
jagaimo - < spec.txt
```

reads the specification (from standard input when the path is `-` or missing)
and prints the parsed attributes. Parse errors are reported on standard error
with exit status 1.

Without `--root-name` and without a `root_name` attribute, the root name is the
crate name read from `Cargo.toml` in the current directory; if that manifest
declares a `[workspace]`, the crate directory is taken from the
`CARGO_CRATE_NAME` environment variable.

## Library use

```python
from jagaimo.spec import parse_spec

with open("spec.txt") as f:
    attrs, rules = parse_spec(f.read(), default_root_name="my_tool")

print(attrs.root_name)
for alias in rules.aliases:
    print(alias.scoped, alias.token, alias.alias)
for command in rules.commands:
    print(command, end="")
```

The lower-level pieces are also available:

- `jagaimo.syntax`: `tokenize`, `TokenStream`, `Token`, `TokenKind`, `Flag`,
  `AliasScope`, `Scope` and `ParseError`.
- `jagaimo.attrs`: `Attrs.parse` and `enforce_naming_convention`.
- `jagaimo.rules`: `Rules.parse`, `AliasRule`, `CommandRule`,
  `parse_command_rule`, `expand_command_rule`, `extract_scope_tokens` and
  `extract_context_tokens`.
- `jagaimo.manifest`: `CrateResolver`, `Manifest` (crate name and version from
  a `Cargo.toml`) and `HelpFile` (a `help.toml` read as a dictionary).

## What it does not do

jagaimo only parses and expands specifications. It does not generate argument
parsers, help or version output, or shell completions; attributes such as
`no_help`, `nu_cmp` and `fish_cmp` are recorded on `Attrs` and nothing more.
Transform rules are not supported.