# plocarkit/__main__.py
from __future__ import annotations

# --------------------------
# Standard library imports
# --------------------------
import os
import sys
import logging

# --------------------------
# Third-party imports
# --------------------------
import numpy as np

# --------------------------
# Package-local imports
# --------------------------
from .cli import parse_arguments, _extract_input_file_from_argv
from .config import options_from_args
from .errors import PlocarError
from .io import read_plocar
from .analysis import occupation_table, band_character
from .logging_utils import setup_logger, banner
from .plotting import (
    save_arrays_npz,
    save_occupations_csv,
    plot_orbital_occupations,
    move_outputs_to_folder,
)
from .template import _normalize_template_flags, generate_template_and_exit


def _log_summary(logger: logging.Logger, params: dict, plo: np.ndarray, ferw: np.ndarray, table) -> None:
    width = max(len(k) for k in params)
    border = "─" * (width + 30)
    logger.info(border)
    for k, v in params.items():
        logger.info(f"  {k:<{width}} : {v}")
    logger.info(f"  {'plo':<{width}} : shape {plo.shape}, dtype {plo.dtype}")
    logger.info(f"  {'ferw':<{width}} : shape {ferw.shape}, dtype {ferw.dtype}")
    logger.info(border)

    logger.info(f"Fermi weights: sum={ferw.sum():.6f}, min={ferw.min():.6f}, max={ferw.max():.6f}")
    char = band_character(plo)
    logger.info(f"Band character Σ|P|²: min={char.min():.4f}, max={char.max():.4f}")

    per_ion = table.groupby(["ion", "spin"])["occupation"].sum()
    for (ion, spin), occ in per_ion.items():
        logger.info(f"  ion {ion:3d}  spin {spin}  :  occupation {occ:.6f}")


def main(argv: list[str] | None = None) -> int:
    # ── normalize argv and handle template-only early exit ───────────
    raw_argv = sys.argv[1:] if argv is None else list(argv)
    argv = _normalize_template_flags(raw_argv)
    if "--template" in argv:
        generate_template_and_exit(_extract_input_file_from_argv(argv))

    try:
        args = parse_arguments(argv)
    except ValueError as exc:
        print(f"plocarkit: {exc}", file=sys.stderr)
        return 2

    logger = setup_logger("plocarkit", log_file=args.log_file)
    banner(logger)

    options = options_from_args(args)
    try:
        params, plo, ferw = read_plocar(args.plocar, options=options)
    except PlocarError as exc:
        logger.error(f"{exc}")
        return 1

    table = occupation_table(params, plo, ferw)
    _log_summary(logger, params, plo, ferw, table)

    prefix = args.output_prefix
    if args.save_npz:
        save_arrays_npz(f"{prefix}.npz", params, plo, ferw)
    if args.save_csv:
        save_occupations_csv(table, f"{prefix}_occupations.csv")
    if args.plot:
        plot_orbital_occupations(table, f"{prefix}_occupations.png",
                                 title=f"Orbital occupations — {os.path.basename(args.plocar)}")
    if args.output_dir:
        move_outputs_to_folder(args.output_dir, prefix)

    logger.info("Done.")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
