# fvekit

`fvekit` is a pure-Python library for working with BitLocker-protected
volumes once their keys are at hand. It provides:

- sector-aligned reads and writes over an encrypted region, with checks for
  read-only volumes, unsafe volume state, protected areas and the
  virtualized boot-sector area;
- exporting a whole decrypted volume to a plain file;
- a small filesystem view that exposes the volume as one file, ready to be
  wired into a userspace filesystem layer;
- reading the dataset stored in a `.BEK` startup-key file;
- choosing which of several unlock methods produced a key, and checking the
  cipher identifier of the volume key;
- small helpers for opening files, hex dumps and xor of buffers.

It depends on nothing outside the standard library.

## Installation

```
pip install fvekit
```

To run the test suite:

```
pip install "fvekit[test]"
pytest
```

## Volume access — `fvekit.volume`

`Volume` wraps a `RegionCodec`: an object you supply with
`decrypt_region(sector_count, sector_size, offset)` returning deciphered
sectors and `encrypt_region(sector_count, sector_size, offset, data)`
storing enciphered ones. `Volume` does the alignment work around it:

- `Volume.read(offset, size)` widens the range to whole sectors, deciphers
  them and returns exactly the requested bytes. A size of 0 returns `b""`.
- `Volume.write(offset, data)` deciphers the covering sectors, patches in
  `data`, enciphers them back and returns the number of bytes written.
  Writes that run past the end of the volume are cut short. Writes touching
  any `(start, length)` range given in `protected` are refused. With
  `seven_layout=True`, writes below `virtualized_size` are redirected by
  `boot_sectors_backup` bytes, and a write straddling that limit is split
  in two.

A volume refuses all I/O until `Volume.mark_ready(state_ok)` has been
called with a true `state_ok`; `Volume.ready` reports this. Failures raise
`VolumeError`, an `OSError` whose `errno` is `EFAULT` (not ready, bad
offset, protected area), `EACCES` (read-only), `EOVERFLOW` (size too large)
or `EIO` (the codec failed).

`sector_span(offset, size, sector_size)` returns `(first_sector,
sector_count)` for a byte range on its own.

## Export — `fvekit.export`

`decrypt_to_file(volume, path, progress=None)` reads the volume sixteen
sectors at a time and writes every chunk into a new file at `path`, created
with mode `0o400` for a read-only volume and `0o600` otherwise.
`progress`, if given, is called with the completed percentage each time it
changes. It returns the number of bytes written and raises `ExportError`
if `path` already exists or cannot be created.

## Filesystem view — `fvekit.fsops`

`VolumeFileSystem(volume)` presents a root directory `/` holding one file,
`/fvekit-file`:

- `getattr(path)` returns a `FileAttributes(mode, nlink, size)`; the file
  is `0o444` on a read-only volume and `0o666` otherwise.
- `readdir("/")` returns `[".", "..", "fvekit-file"]`.
- `open(path, flags)` allows only read-only access on a read-only volume.
- `read(path, size, offset)` and `write(path, data, offset)` go through the
  volume.

Unknown paths raise `OSError` with `ENOENT`, missing arguments `EINVAL`,
and refused access `EACCES`.

## Unlock methods — `fvekit.accesses`

`select_key(means, resolvers)` takes one `DecryptionMean` flag (or several
combined, or an iterable of them) and a mapping from each mean to a
callable. It tries the requested means in the order clear key, user
password, recovery password, BEK file, FVEK file, VMK file, and returns
`(mean, key)` for the first callable that returns something other than
`None`. A callable that raises `OSError`, `ValueError`, `LookupError` or
`AccessError`, or a requested mean without a callable, counts as a failure.
When all fail, `AccessError` is raised.

`check_algorithm(algo, lowest, highest)` keeps the low 16 bits of `algo`
and returns them, raising `AccessError` if they fall outside the range.

## BEK files — `fvekit.bekfile`

`read_bek_dataset(stream)` reads one dataset from a binary stream: a
0x30-byte header whose first four bytes give, little-endian, the length of
the whole dataset, followed by the rest. `load_bek_dataset(path)` opens a
file and does the same. Both return the dataset bytes, header included,
and raise `BekFileError` for a file that cannot be opened, a truncated
header or content, or a size no larger than the header.

## Helpers — `fvekit.common`

- `open_file(path, flags)` wraps `os.open` and raises `OpenError` (keeping
  the original `errno`) on failure.
- `hexdump(data)` renders bytes as lines of sixteen, each prefixed by its
  offset, with a `-` after the eighth byte.
- `xor_buffer(buf1, buf2)` returns the byte-wise xor of two equal-length
  buffers and raises `ValueError` otherwise.

## What fvekit does not do

- It has no command-line tool; everything is used from Python.
- It does not derive keys from recovery passwords or user passwords, and
  does not prompt for them.
- It does not parse volume metadata or decrypt sectors itself: the cipher
  work is left to the `RegionCodec` you supply, and the keys to the
  callables given to `select_key`.
- It does not mount anything; `VolumeFileSystem` only provides the
  operations a userspace filesystem layer would call.