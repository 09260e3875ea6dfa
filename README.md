# mp4atoms

A low-level encoder and decoder for atoms (boxes) of the ISO Base Media File
Format. It covers file type and media data atoms, fragmented MP4 (`moof`) and
event messages, and the item atoms used by HEIF/AVIF metadata. It works on
the binary layout only. It does not check what the data means, so you need to
know which atoms to expect.

It has no dependencies outside the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `mp4atoms.codec` | `Reader` and `Writer`, big-endian buffers |
| `mp4atoms.header` | `FourCC` and `Header` |
| `mp4atoms.atom` | `Atom`, `FullAtom`, `Ext`, `ExtSpec`, `Unknown`, `register`, `atom_class`, `decode_any`, `decode_any_maybe`, `decode_any_atom`, `read_any`, `read_any_optional`, `read_any_atom`, `decode_nested` |
| `mp4atoms.ftyp` | `Ftyp` |
| `mp4atoms.mdat` | `Mdat` |
| `mp4atoms.emsg` | `Emsg`, `RelativeTime`, `AbsoluteTime` |
| `mp4atoms.moof` | `Moof`, `Mfhd`, `Traf`, `Tfhd`, `Tfdt`, `Trun`, `TrunEntry` |
| `mp4atoms.iinf` | `Iinf`, `ItemInfoEntry` |
| `mp4atoms.iloc` | `Iloc`, `ItemLocation`, `ItemLocationExtent` |
| `mp4atoms.iref` | `Iref`, `Reference` |
| `mp4atoms.pitm` | `Pitm` |
| `mp4atoms.idat` | `Idat` |
| `mp4atoms.properties` | `Auxc`, `Clap`, `Imir`, `Irot`, `Iscl`, `Ispe`, `Pixi`, `Rref` |
| `mp4atoms.iprp` | `Iprp`, `Ipco`, `Ipma`, `PropertyAssociations`, `PropertyAssociation` |
| `mp4atoms.ilst` | `Ilst`, `Name`, `Year`, `Covr`, `Desc` |
| `mp4atoms.errors` | `Mp4Error` and its subclasses |
| `mp4atoms.cli` | the `mp4atoms-info` command |

## Decoding and encoding bytes

Every atom is a dataclass with a four-character `KIND`. `to_bytes()` returns
the encoded atom, header included. A concrete class's `decode()` reads one
atom of its kind from a `Reader`.

```python
from mp4atoms.codec import Reader
from mp4atoms.atom import decode_any
from mp4atoms.ftyp import Ftyp

data = b"\0\0\0\x14ftypiso6\0\0\x02\0mp41"
atom = decode_any(Reader(data))
assert isinstance(atom, Ftyp)
assert atom.minor_version == 512
assert atom.to_bytes() == data
```

An atom class becomes known to the generic decoders (`decode_any`,
`read_any` and the rest) when its module is imported. `mp4atoms.cli` imports
all of them. If a kind has no known class, the generic decoders return an
`Unknown` atom. It keeps the kind (`atom.kind`) and the raw body bytes
(`atom.data`).

Full atoms (those with a version and flags) return an `Ext` from
`encode_body_ext`. Where the format allows several layouts, the encoder picks
the version from the values. For example, `Pitm` uses version 1 only when the
item id does not fit in 16 bits, and `Emsg` uses version 1 for an
`AbsoluteTime`.

## Reading from files and streams

```python
from mp4atoms import cli  # registers every atom class
from mp4atoms.atom import read_any_optional

with open("video.mp4", "rb") as f:
    while (atom := read_any_optional(f)) is not None:
        print(cli.describe(atom))
```

Reading an atom loads its whole body into memory. For large `mdat` atoms, read
the header first with `Header.read_from(stream)`. From there you decide what
to do with the body: pass the header to a concrete class's `read_atom`, or to
`read_any_atom`. A concrete class's `read_until` discards atoms until it finds
one of its own kind.

`write_to(stream)` writes an encoded atom to a binary stream.

## Errors

Every decoding and encoding failure raises a subclass of
`mp4atoms.errors.Mp4Error`. Examples are `OutOfBounds`, `UnderDecode`,
`MissingBox`, `DuplicateBox` and `UnknownVersion`.

## Command line

`mp4atoms-info` prints every top-level atom in a file, one per line. With no
argument it reads standard input. `mdat` and unknown atoms are shown by kind
and size only.

```
mp4atoms-info video.mp4
cat video.mp4 | mp4atoms-info
```

On a decoding or I/O error it prints the message to standard error and exits
with status 1.

## What it does not do

- There are no classes for `moov` or anything inside it: `mvhd`, `trak`,
  `mdia`, the sample tables, sample entries or codec configurations such as
  `avcC`. There is no class for `meta`, `styp` or `free` either. These atoms
  decode as `Unknown`, and their contents are not parsed.
- Encoding an atom whose total size does not fit in 32 bits raises
  `TooLarge`. `Header` itself can encode and decode 64-bit sizes.
- All input and output is synchronous. There is no asynchronous reader.