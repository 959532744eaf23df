#!/usr/bin/env python3
"""
Mel-Generalized Cepstrum to Power Spectrum

Converts a matrix of mel-generalized cepstra (one frame per row) into power
spectral envelopes.

Usage:
    mgcspec --input frames.npy --output spectra.npy
    mgcspec --input frames.txt --output spectra.txt --alpha 0.42 --n-freq 513
    mgcspec --input frames.npy --output spectra.npy --config my_settings.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from .dsp_core import power_spectrogram
from .utils.config import SpectrumConfig, load_config
from .utils.logging import setup_logging

console = Console(stderr=True)


def load_frames(path: Path) -> np.ndarray:
    """Read a frame matrix from .npy or whitespace-separated text."""
    if path.suffix == '.npy':
        frames = np.load(path)
    else:
        frames = np.loadtxt(path, dtype=np.float64, ndmin=2)
    frames = np.asarray(frames, dtype=np.float64)
    if frames.ndim == 1:
        frames = frames[np.newaxis, :]
    if frames.ndim != 2:
        raise ValueError(f"Expected a 2-D frame matrix in {path}, got shape {frames.shape}")
    return frames


def save_spectra(path: Path, spectra: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == '.npy':
        np.save(path, spectra)
    else:
        np.savetxt(path, spectra, fmt='%.10e')


def build_config(args: argparse.Namespace) -> SpectrumConfig:
    """Config file values, overridden by explicit command-line flags."""
    config = load_config(args.config)
    if args.alpha is not None:
        config.alpha = args.alpha
    if args.gamma is not None:
        config.gamma = args.gamma
    if args.fft_length is not None:
        config.fft_length = args.fft_length
        config.n_freq = None
    if args.n_freq is not None:
        config.n_freq = args.n_freq
    return config


def convert(frames: np.ndarray, config: SpectrumConfig, show_progress: bool = True) -> np.ndarray:
    fft_length = config.effective_fft_length

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        disable=not show_progress,
    ) as progress:
        task = progress.add_task("Computing spectra", total=frames.shape[0])
        spectra = power_spectrogram(
            frames, config.alpha, config.gamma, fft_length,
            callback=lambda i: progress.advance(task)
        )

    return spectra


def print_summary(frames: np.ndarray, spectra: np.ndarray, config: SpectrumConfig, output: Path):
    table = Table(title="Spectrum Summary", show_header=True, header_style="bold")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Frames", str(frames.shape[0]))
    table.add_row("Cepstral order", str(frames.shape[1] - 1))
    table.add_row("alpha", f"{config.alpha:.4f}")
    table.add_row("gamma", f"{config.gamma:.4f}")
    table.add_row("FFT length", str(config.effective_fft_length))
    table.add_row("Bins per frame", str(spectra.shape[1]))
    if spectra.size:
        table.add_row("Power range", f"[{spectra.min():.4e}, {spectra.max():.4e}]")

    console.print(table)
    console.print(f"[green]✓[/green] Spectra saved to {output}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert mel-generalized cepstra to power spectra"
    )
    parser.add_argument('--input', '-i', type=str, required=True,
                        help='Frame matrix (.npy or text), one cepstrum per row')
    parser.add_argument('--output', '-o', type=str, required=True,
                        help='Output path (.npy or text)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML configuration file')
    parser.add_argument('--alpha', type=float, default=None,
                        help='All-pass constant')
    parser.add_argument('--gamma', type=float, default=None,
                        help='Generalization exponent (-1 <= gamma <= 0)')

    size = parser.add_mutually_exclusive_group()
    size.add_argument('--fft-length', type=int, default=None,
                      help='FFT length (power of 2)')
    size.add_argument('--n-freq', type=int, default=None,
                      help='Number of frequency points (2^k + 1)')

    parser.add_argument('--log-file', type=str, default=None,
                        help='Write a detailed log to this file')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress progress and summary output')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        return 1

    logger = setup_logging(
        log_file=args.log_file,
        level=getattr(logging, config.log_level),
        name='mgcspec'
    )
    logger.info(f"Configuration: {config.to_dict()}")

    input_path = Path(args.input)
    output_path = Path(args.output)

    try:
        frames = load_frames(input_path)
        logger.info(f"Loaded {frames.shape[0]} frames of order {frames.shape[1] - 1} from {input_path}")

        spectra = convert(frames, config, show_progress=not args.quiet)
        save_spectra(output_path, spectra)
        logger.info(f"Saved spectra {spectra.shape} to {output_path}")

    except (OSError, ValueError) as e:
        logger.exception("Spectrum conversion failed")
        if not args.quiet:
            console.print(Panel.fit(f"[bold red]Error: {e}[/bold red]", border_style="red"))
        return 1

    if not args.quiet:
        print_summary(frames, spectra, config, output_path)

    return 0


if __name__ == '__main__':
    sys.exit(main())
