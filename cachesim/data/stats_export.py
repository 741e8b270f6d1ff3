"""Statistics and exporter.
"""
import csv
import json
from typing import Dict, List, Optional


def format_rate(rate: Optional[float]) -> str:
    """Render a rate with trailing zeros stripped ("0.5", "1.0").

    None (no accesses yet) renders as "undefined".
    """
    if rate is None:
        return 'undefined'
    text = f"{rate:.6f}".rstrip('0')
    if text.endswith('.'):
        text += '0'
    return text


def export_chart_json(hit_rate_history: List[float], stats: Dict[str, object], fpath: str) -> str:
    """Export hit-rate history and stats to a JSON file. Returns the saved path.
    """
    data = {
        'hit_rate_history': list(hit_rate_history),
        'stats': stats
    }
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    return fpath


def export_chart_pdf(hit_rate_history: List[float], fpath: str) -> str:
    """Render the hit-rate history to a PDF using matplotlib and save it.
    Returns the saved file path.
    """
    # Use matplotlib
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    ax.set_ylim(0, 1)
    ax.set_xlabel('Access')
    ax.set_ylabel('Hit rate')
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, format='pdf', dpi=150)
    plt.close(fig)
    return fpath


class Statistics:
    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.accesses = 0
        self.hits = 0
        self.misses = 0

    def record_access(self, hit: bool):
        # simple counter update: call this for every cache access
        self.accesses += 1
        if hit:
            self.hits += 1
        else:
            self.misses += 1

    @property
    def hit_rate(self) -> Optional[float]:
        # undefined until something has been accessed
        return (self.hits / self.accesses) if self.accesses else None

    @property
    def miss_rate(self) -> Optional[float]:
        return (self.misses / self.accesses) if self.accesses else None

    def as_dict(self) -> Dict[str, object]:
        return {
            'accesses': self.accesses,
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
        }


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Dict[str, object]):
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['accesses', 'hits', 'misses', 'hit_rate', 'miss_rate'])
            writer.writerow([
                stats['accesses'], stats['hits'], stats['misses'],
                format_rate(stats['hit_rate']), format_rate(stats['miss_rate']),
            ])
