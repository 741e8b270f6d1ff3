"""Entry point for the cache simulator.

Usage:
    python run.py 1024 64 1 --trace trace.txt   # simulate a trace file
    python run.py 128 16 2 < trace.txt          # trace on stdin
    python run.py 128 16 2 --demo "Strided"     # built-in scenario
    python run.py 128 16 2 --trace t.txt --contents --csv stats.csv
"""
import argparse
import sys

from cachesim.core.cache import Cache
from cachesim.core.config import ConfigurationError
from cachesim.core.simulator import CacheSimulator
from cachesim.data.stats_export import Exporter, export_chart_json, export_chart_pdf
from cachesim.simulation import SCENARIOS, Simulation
from cachesim.simulation.report import format_configuration, format_contents, format_statistics
from cachesim.simulation.trace import TraceFormatError, load_trace, read_trace


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate an LRU set-associative cache over an address trace.")
    parser.add_argument('capacity', type=int, help="cache capacity in bytes")
    parser.add_argument('block_size', type=int, help="block size in bytes")
    parser.add_argument('associativity', type=int, nargs='?', default=1, help="ways per set (default 1, direct mapped)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--trace', help="trace file, one address per line (default: stdin)")
    source.add_argument('--demo', choices=SCENARIOS, help="run a built-in scenario instead of a trace")
    parser.add_argument('--contents', action='store_true', help="print the cache contents after the run")
    parser.add_argument('--legacy', dest='strict', action='store_false',
                        help="only require even sizes instead of powers of two")
    parser.add_argument('--match-contents', action='store_true',
                        help="detect hits by searching block contents for the raw address")
    parser.add_argument('--csv', help="write statistics to a CSV file")
    parser.add_argument('--json', help="write statistics and hit-rate history to a JSON file")
    parser.add_argument('--pdf', help="plot the hit-rate history to a PDF file")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cache = Cache(args.capacity, args.block_size, args.associativity,
                      strict=args.strict, match_contents=args.match_contents)
    except ConfigurationError as e:
        print(f"The input values are not valid. Failed to set up cache: {e}", file=sys.stderr)
        return 1

    try:
        if args.demo:
            addresses = Simulation(args).generate_sequence(args.demo)
        elif args.trace:
            addresses = load_trace(args.trace)
        else:
            addresses = list(read_trace(sys.stdin))
    except (OSError, TraceFormatError) as e:
        print(f"Failed to read trace: {e}", file=sys.stderr)
        return 1

    print(format_configuration(cache))
    sim = CacheSimulator(cache)
    sim.load_sequence(addresses)
    sim.run_all()

    if args.contents:
        print(format_contents(cache))
    print(format_statistics(cache))

    if args.csv:
        Exporter.export_stats_csv(args.csv, cache.statistics())
        print('Statistics saved to:', args.csv)
    if args.json:
        export_chart_json(sim.hit_rate_history, cache.statistics(), args.json)
        print('Chart data saved to:', args.json)
    if args.pdf:
        export_chart_pdf(sim.hit_rate_history, args.pdf)
        print('Chart saved to:', args.pdf)
    return 0


if __name__ == '__main__':
    sys.exit(main())
