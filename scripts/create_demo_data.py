#!/usr/bin/env python3
"""
Create a demonstration nuclide table.

Light nuclides from H to Ca with made-up yields that fall off away from the
valley of stability, a few decay modes and half-lives.  Written as Parquet
(and optionally JSON) for scripts/draw_chart.py.
"""

from pathlib import Path

import numpy as np
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

SYMBOLS = [
    'n', 'H', 'He', 'Li', 'Be', 'B', 'C', 'N', 'O', 'F', 'Ne',
    'Na', 'Mg', 'Al', 'Si', 'P', 'S', 'Cl', 'Ar', 'K', 'Ca',
]


def create_demo_nuclides(seed: int = 42) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []
    for z in range(1, len(SYMBOLS)):
        # Stable line is N ~ Z for light nuclei
        for n in range(max(0, z - 3), z + 5):
            a = z + n
            distance = abs(n - z - 0.5)
            yield_ = float(5e3 * np.exp(-1.5 * distance) * rng.uniform(0.5, 1.5))
            if n > z:
                mode = 'b-'
            elif n < z:
                mode = 'ec' if z > 4 else 'p'
            else:
                mode = 'is'
            halflife = 'stable' if mode == 'is' else f"{rng.uniform(0.1, 999):.3g} s"
            rows.append({
                'Z': z, 'A': a, 'Symbol': SYMBOLS[z],
                'Yield': yield_ if yield_ >= 1 else None,
                'HalflifeText': halflife,
                'Mode': mode,
            })
    return pd.DataFrame(rows)


def main():
    print("=" * 70)
    print("Creating Demonstration Nuclide Table")
    print("=" * 70)

    df = create_demo_nuclides()
    print(f"✓ {len(df):,} nuclides, Z = {df['Z'].min()}..{df['Z'].max()}")

    output_path = Path('data/demo_nuclides.parquet')
    output_path.parent.mkdir(parents=True, exist_ok=True)

    table = pa.Table.from_pandas(df, preserve_index=False)
    pq.write_table(table, output_path)
    print(f"✓ Saved to {output_path}")

    json_path = output_path.with_suffix('.json')
    df.to_json(json_path, orient='records', indent=2)
    print(f"✓ Saved to {json_path}")
    print("=" * 70)


if __name__ == '__main__':
    main()
