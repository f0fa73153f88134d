# jsonweave

A small JSON toolkit: an insertion-ordered hash table keyed by strings, a
flag-driven JSON encoder, and the hashing and error-reporting pieces they
rest on.

## Modules

- `jsonweave.lookup3`: the lookup3 `hashlittle(key, initval=0)` hash, which
  takes bytes, or text that it encodes as UTF-8, and returns a 32-bit value.
  `hashsize(order)` and `hashmask(order)` give the bucket count and mask for
  a table of `2 ** order` buckets.
- `jsonweave.seed`: the process-wide hash seed. `object_seed(seed)` sets it
  once; passing `0` asks for a generated one, and later calls have no effect.
  `current_seed()` returns it, generating one first if none is set.
  `reset_seed()` clears it so that `object_seed` applies again.
  `generate_seed()` returns a fresh non-zero 32-bit seed.
- `jsonweave.errors`: `ErrorInfo`, a dataclass with `line`, `column`,
  `position`, `source` and `text`, whose `set()` keeps only the first error
  recorded; `JsonError`, an exception carrying an `ErrorInfo` as `info`; and
  `truncate_source`, which shortens source names of 80 characters or more to
  `"..."` followed by their tail. Error texts are cut to 159 characters.
- `jsonweave.hashtable`: `HashTable`, a mutable mapping from `str` to any
  value that keeps keys in the order they were first inserted. Replacing a
  value keeps the key where it is, and deleting a key leaves the others in
  order. Keys are hashed with `hashlittle` and the process-wide seed.
  `iter_from(key)` iterates over keys from `key` onward and raises `KeyError`
  if it is absent. The current entry may be deleted while iterating.
- `jsonweave.dump`: the encoder. `dumps`, `dumpb`, `dumpf`, `dumpfd`,
  `dump_file` and `dump_callback` encode `None`, booleans, integers, floats,
  strings, lists, tuples and any mapping with string keys (a `HashTable`
  included). Options are set with `DumpFlags` (`COMPACT`, `ENSURE_ASCII`,
  `SORT_KEYS`, `PRESERVE_ORDER`, `ENCODE_ANY`, `ESCAPE_SLASH`, `EMBED`),
  `indent_flag(n)` and `real_precision_flag(n)`. Failures raise
  `EncodeError`, a `JsonError`. Examples are a structure that contains
  itself, a NaN or infinite float, a value of an unsupported type, or a
  callback that returns a true value.

## Example

```python
from jsonweave.dump import DumpFlags, dumps, indent_flag
from jsonweave.hashtable import HashTable

table = HashTable({"b": 1, "a": [True, None, 2.5]})
print(dumps(table, 0))
# {"b": 1, "a": [true, null, 2.5]}

print(dumps(table, DumpFlags.SORT_KEYS | indent_flag(2)))
```

By default only arrays and objects can be encoded at the top level. Pass
`DumpFlags.ENCODE_ANY` to encode scalars as well. `DumpFlags.EMBED` leaves
out the outermost brackets or braces.

`dumpb(value, size)` returns UTF-8 bytes. If the output is longer than
`size`, it raises `EncodeError` and sets `needed` to the full length.
`dumpf` writes to a text stream or a binary stream. `dump_file` replaces the
file at the given path.

## What it does not do

The package only encodes JSON. It has no parser, so it cannot read JSON
text. It has no pack or unpack format strings and no command-line program.

## Installation

```
pip install jsonweave
```

## Running the tests

```
pip install -e .[test]
pytest
```