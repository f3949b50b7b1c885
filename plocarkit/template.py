#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
template.py — Input template generator for plocarkit
====================================================
Writes a commented `plocar.inp` control file into the working directory,
only when it is missing, so existing user edits are never overwritten.

Main components
----------------
- **PLOCAR_INP_TEMPLATE**   : canonical `[PLOCAR]` control file.
- **write_plocar_template()** : safe writer (no overwrite), UTF-8.
- **generate_template_and_exit()** : used by `plocarkit --template`.
- **_normalize_template_flags(argv)** : maps `-0`, `- 0` and `-T`
  onto `--template`.

Usage
------
```bash
plocarkit --template
plocarkit --input_file plocar.inp
```

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""

from __future__ import annotations
import sys, os
from pathlib import Path
from textwrap import dedent

BANNER = r"""
══════════════════════════════════════════════════════════════════════
     PLOCAR conversion toolkit (plocarkit)
══════════════════════════════════════════════════════════════════════

A template input has been generated in the current directory.
Modify it to suit your calculation.

You will need the binary PLOCAR file written by the projection step
of your electronic-structure run.

Run examples:
  plocarkit --input_file plocar.inp
  plocarkit --template         # regenerate template (won’t overwrite)
"""

PLOCAR_INP_TEMPLATE = dedent("""\
    # plocar.inp — edit values in the [PLOCAR] section
    [PLOCAR]
    plocar = PLOCAR             # binary PLOCAR file to decode
    output_prefix = plocar      # stem for .npz / .csv / .png outputs
    output_dir =                # optional folder to collect the outputs

    verbose = false             # echo precision and header fields
    save_npz = true             # write <prefix>.npz with params, plo, ferw
    save_csv = true             # write <prefix>_occupations.csv
    plot = false                # write <prefix>_occupations.png

    max_gib = 8.0               # refuse headers needing more memory than this
    """)

def _write_file_if_missing(path: Path, content: str) -> bool:
    """
    Write text file if it doesn't already exist. Returns True if written.
    """
    if path.exists():
        return False
    path.write_text(content, encoding="utf-8")
    return True

def write_plocar_template(filename: str | os.PathLike = "plocar.inp") -> bool:
    return _write_file_if_missing(Path(filename), PLOCAR_INP_TEMPLATE)

def generate_template_and_exit(input_file: str = "plocar.inp") -> None:
    created = write_plocar_template(input_file)
    print(BANNER)
    status = "created" if created else "exists (kept)"
    print(f"  - {input_file:13s} : {status}")
    if not created:
        print("\nNothing was overwritten. Delete it and re-run `plocarkit --template` to regenerate.")
    print(f"\nEdit '{input_file}' and re-run:  plocarkit --input_file {input_file}\n")
    sys.exit(0)


def _normalize_template_flags(argv: list[str]) -> list[str]:
    """
    Map the short template switches onto '--template'.

    `-0`, `- 0` and `-T` all mean "write plocar.inp and exit"; every other
    token, including `--input_file`, passes through unchanged.
    """
    out: list[str] = []
    tokens = iter(argv)
    for tok in tokens:
        t = tok.strip()
        if t in ("-0", "-T", "--template"):
            out.append("--template")
        elif t == "-":
            nxt = next(tokens, None)
            if nxt is not None and nxt.strip() == "0":
                out.append("--template")
            else:
                out.append(tok)
                if nxt is not None:
                    out.append(nxt)
        else:
            out.append(tok)
    return out


__all__ = [
    "PLOCAR_INP_TEMPLATE",
    "write_plocar_template",
    "generate_template_and_exit",
    "_normalize_template_flags",
]
