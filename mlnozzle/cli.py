"""Command-line interface for the minimum-length nozzle designer.

Usage:
    mlnozzle run config.yaml [--output-dir DIR]
    mlnozzle example [--M-exit 2.0] [--n-chars 7]
"""

import argparse
import json
from pathlib import Path

import numpy as np
import yaml
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from mlnozzle.analysis import design_summary
from mlnozzle.config import build_design_parameters, build_output_options, load_config
from mlnozzle.design import DesignParameters, minimum_length_nozzle
from mlnozzle.output import (
    MAX_LETTERED_CHARS, as_csv_degrees, csv_header, point_names,
    write_contour_csv, write_points_csv,
)
from mlnozzle.plots import plot_characteristic_net, plot_contour


def main(args=None):
    parser = argparse.ArgumentParser(
        prog='mlnozzle',
        description='Minimum-length nozzle design by the method of characteristics',
    )
    subparsers = parser.add_subparsers(dest='command')

    # --- run command ---
    run_parser = subparsers.add_parser('run', help='Run from config file')
    run_parser.add_argument('config', type=str, help='YAML config file')
    run_parser.add_argument('--output-dir', '-o', default=None,
                            help='Output directory (default: ./output)')

    # --- example command ---
    example_parser = subparsers.add_parser('example', help='Print a point table')
    example_parser.add_argument('--M-exit', type=float, default=2.0,
                                help='Exit Mach number')
    example_parser.add_argument('--gamma', type=float, default=1.4,
                                help='Ratio of specific heats')
    example_parser.add_argument('--n-chars', type=int, default=7,
                                help='Characteristics in the throat fan')
    example_parser.add_argument('--theta-min-deg', type=float, default=0.375,
                                help='First fan angle [deg]')
    example_parser.add_argument('--decimals', type=int, default=4,
                                help='Decimal places in the table')

    parsed = parser.parse_args(args)

    if parsed.command == 'run':
        return cmd_run(parsed)
    elif parsed.command == 'example':
        return cmd_example(parsed)
    else:
        parser.print_help()
        return 1


def cmd_run(args):
    """Run nozzle designs from a YAML config file."""
    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}")
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else Path('output')
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        spec = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1
    outputs = spec['outputs']

    summary = {}
    for name, cfg in spec['configs'].items():
        try:
            params = build_design_parameters(cfg)
            options = build_output_options(cfg)
            summary[name] = _run_single(params, options, name, output_dir, outputs)
        except ValueError as e:
            print(f"Error in '{name}': {e}")
            return 1

    json_path = output_dir / 'summary.json'
    with open(json_path, 'w') as f:
        json.dump(summary, f, indent=2)
    print(f"Saved design summary to {json_path}")
    return 0


def _run_single(params, options, name, output_dir, outputs):
    """Design one nozzle and write the requested outputs."""
    mesh = minimum_length_nozzle(params)
    result = design_summary(mesh, params)
    print(f"  {name}: M_exit={params.exit_mach:.3f}, n_chars={params.n_chars}, "
          f"L={result['length']:.4f}, y_exit={result['exit_height']:.4f} "
          f"(A/A*={result['area_ratio_ideal']:.4f}, "
          f"err={result['area_ratio_error'] * 100:+.2f}%)")

    title = (f"{name}: gamma={params.gamma} M_exit={params.exit_mach} "
             f"n_chars={params.n_chars}")

    if 'points' in outputs:
        names = None
        if params.n_chars <= MAX_LETTERED_CHARS:
            names = point_names(params.n_chars, len(mesh.points))
        path = write_points_csv(output_dir / f'{name}_points.csv', mesh.points,
                                names=names,
                                decimal_places=options['decimal_places'],
                                title=title)
        print(f"    Saved points to {path}")

    if 'contour' in outputs:
        path = write_contour_csv(output_dir / f'{name}_contour.csv', mesh.points,
                                 throat_radius_m=options['throat_radius_m'],
                                 title=title)
        print(f"    Saved contour to {path}")

        fig, ax = plot_contour(mesh, label=name, title=f"{name} Nozzle Contour")
        path = output_dir / f'{name}_contour.png'
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        print(f"    Saved contour plot to {path}")

    if 'plot' in outputs:
        fig, ax = plot_characteristic_net(mesh, title=f"{name} MLN (M={params.exit_mach})")
        path = output_dir / f'{name}_net.png'
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        print(f"    Saved characteristic net to {path}")

    return result


def cmd_example(args):
    """Print the point table of a single design, named where possible."""
    try:
        params = DesignParameters(
            gamma=args.gamma,
            exit_mach=args.M_exit,
            theta_min=float(np.radians(args.theta_min_deg)),
            n_chars=args.n_chars,
        )
        mesh = minimum_length_nozzle(params)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Minimum Length Nozzle")
    print(f"  M_exit  = {params.exit_mach:.2f}")
    print(f"  γ       = {params.gamma}")
    print(f"  n_chars = {params.n_chars}")
    print()
    named = params.n_chars <= MAX_LETTERED_CHARS
    print(csv_header(named=named))
    names = point_names(params.n_chars, len(mesh.points)) if named else None
    for i, p in enumerate(mesh.points):
        row = as_csv_degrees(p, args.decimals)
        print(f"{names[i]},{row}" if named else row)

    result = design_summary(mesh, params)
    print(f"\nSummary:")
    print(f"   θ_max        = {result['theta_max_deg']:.4f}°")
    print(f"   Length       = {result['length']:.4f} · h*")
    print(f"   Exit height  = {result['exit_height']:.4f} · h*")
    print(f"   Ideal A/A*   = {result['area_ratio_ideal']:.4f} "
          f"({result['area_ratio_error'] * 100:+.2f}%)")
    print(f"   Exit M       = {result['exit_mach']:.4f}, "
          f"θ = {result['exit_theta_deg']:.4f}°")
    return 0
