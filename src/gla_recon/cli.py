import argparse
import logging
import os
import sys

from tqdm import tqdm

from .config import ReconstructionParams
from .pipeline import reconstruct_file
from .utils.metrics import compute_sisnr, spectral_convergence
from .utils.plots import plot_filterbank, plot_semitone_spectrogram, plot_spectrogram
from .utils.spectrogram import semitone_spectrogram

EXAMPLE_USAGE = """
Examples:
  gla-recon --in-file in.wav
  gla-recon --in-file in.wav --fft-size 1024 --iterations 100 --seed 7
  gla-recon --in-file in.wav --enable-mel-scale --enable-filter --cutoff-freq 2000 --plot-dir plots/
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reconstruct audio from its magnitude spectrogram with Griffin-Lim.",
        epilog=EXAMPLE_USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--in-file', required=True, help='Input WAV file')
    parser.add_argument('--out-file', default='out.wav', help='Output WAV file')
    parser.add_argument('--sample-rate-hz', type=int, default=44100, help='Sample rate in Hz')
    parser.add_argument('--fft-size', type=int, default=2048, help='FFT size')
    parser.add_argument('--hop-size', type=int, default=None, help='Hop size (default: fft-size / 8)')
    parser.add_argument('--iterations', type=int, default=300, help='Number of iterations to run')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the initial estimate')
    parser.add_argument('--enable-filter', action='store_true', help='Apply a low-pass filter')
    parser.add_argument('--cutoff-freq', type=float, default=1000.0,
                        help='If filter is enabled, the low-pass cutoff frequency in Hz')
    parser.add_argument('--enable-mel-scale', action='store_true', help='Convert to mel scale and back')
    parser.add_argument('--resample', action='store_true',
                        help='Resample input instead of rejecting a sample rate mismatch')
    parser.add_argument('--plot-dir', default=None, help='Write spectrogram images here')
    return parser


def params_from_args(args: argparse.Namespace) -> ReconstructionParams:
    return ReconstructionParams(
        sample_rate=args.sample_rate_hz,
        n_fft=args.fft_size,
        hop_length=args.hop_size,
        iterations=args.iterations,
        seed=args.seed,
        enable_mel_scale=args.enable_mel_scale,
        enable_filter=args.enable_filter,
        cutoff_hz=args.cutoff_freq,
    )


def save_plots(result, plot_dir: str) -> None:
    plot_spectrogram(result.scaled_power, os.path.join(plot_dir, 'unmodified_spectrogram.png'),
                     title='Unmodified spectrogram')
    if result.filterbank is not None:
        plot_filterbank(result.filterbank, os.path.join(plot_dir, 'mel_scale_filterbank.png'))
        plot_spectrogram(result.mel_spectrogram, os.path.join(plot_dir, 'mel_scale_spectrogram.png'),
                         title='Mel scale spectrogram')
        plot_spectrogram(result.linear_from_mel,
                         os.path.join(plot_dir, 'inverted_mel_to_linear_freq_spectrogram.png'),
                         title='Linear scale spectrogram obtained from mel scale spectrogram')
    plot_spectrogram(result.magnitude, os.path.join(plot_dir, 'reconstruction_spectrogram.png'),
                     title='Spectrogram used to reconstruct audio')
    notes, semitones = semitone_spectrogram(result.source.samples, result.source.sample_rate)
    plot_semitone_spectrogram(notes, semitones, os.path.join(plot_dir, 'semitone_spectrogram.png'))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    params = params_from_args(args)
    print(f"[INFO] Loading input: {args.in_file}")
    try:
        params.validate()
        with tqdm(total=params.iterations, desc="Reconstruction iteration") as bar:
            def on_progress(current, total):
                bar.update(1)

            result = reconstruct_file(args.in_file, args.out_file, params,
                                      progress=on_progress, resample=args.resample)
        sc = spectral_convergence(result.magnitude, result.signal.samples, params.n_fft, params.hop)
        sisnr = compute_sisnr(result.source.samples, result.signal.samples)
        print(f"[RESULT] Spectral convergence: {sc:.4f} | SiSNR: {sisnr:.2f} dB | Output: {args.out_file}")
        if args.plot_dir:
            save_plots(result, args.plot_dir)
            print(f"[INFO] Plots saved to: {args.plot_dir}")
    except (ValueError, FileNotFoundError) as e:
        print(f"[ERROR] Processing failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
