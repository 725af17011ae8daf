#!/usr/bin/env python3
"""
Bit-field test vector generator.

Draws random payloads for each layout in a YAML config and records the
field values an LSB-first decoder must produce. The values come from
numpy's bit unpacking, not from bitbuffer, so the vectors check the
library against an independent implementation.

For each layout writes to <output_dir>:
    <name>.bin              payloads, concatenated
    <name>-metadata.json    widths, payload length and expected values

Usage:
    python generate.py layouts.yaml
"""
import json
import sys
import yaml
from pathlib import Path
from common import make_rng, random_payload, expected_fields, calculate_md5


def generate_layout(layout: dict, output_dir: Path) -> dict:
    """Generate the payloads and metadata for one layout."""
    name = layout['name']
    widths = [int(w) for w in layout['widths']]
    payload_length = int(layout['payload_length'])
    num_payloads = int(layout['num_payloads'])
    seed = int(layout['seed'])

    total_bits = sum(widths)
    if total_bits > payload_length * 8:
        raise ValueError(
            f"{name}: widths need {total_bits} bits but payloads hold {payload_length * 8}"
        )

    rng = make_rng(seed)
    data = bytearray()
    expected = []
    for _ in range(num_payloads):
        payload = random_payload(rng, payload_length)
        data.extend(payload)
        expected.append(expected_fields(payload, widths))

    bin_path = output_dir / f"{name}.bin"
    with open(bin_path, 'wb') as f:
        f.write(bytes(data))

    metadata = {
        'name': name,
        'description': layout.get('description', '').strip(),
        'seed': seed,
        'widths': widths,
        'payload_length': payload_length,
        'num_payloads': num_payloads,
        'exact': total_bits == payload_length * 8,
        'file': bin_path.name,
        'md5': calculate_md5(bytes(data)),
        'expected': expected,
    }
    with open(output_dir / f"{name}-metadata.json", 'w') as f:
        json.dump(metadata, f, indent=2)

    print(f"{name}: {num_payloads} payloads of {payload_length} bytes, "
          f"{len(widths)} fields ({total_bits} bits)")
    print(f"MD5: {metadata['md5']}")
    return metadata


def main():
    if len(sys.argv) != 2:
        print("Usage: generate.py <layouts.yaml>")
        sys.exit(1)

    config_file = Path(sys.argv[1])

    # Load configuration
    with open(config_file, 'r') as f:
        config = yaml.safe_load(f)

    # Output directory is relative to the config file
    output_dir = config_file.parent / config['output']['dir']
    output_dir.mkdir(parents=True, exist_ok=True)

    for layout in config['layouts']:
        generate_layout(layout, output_dir)

    print(f"\nWrote {len(config['layouts'])} layouts to {output_dir}")


if __name__ == "__main__":
    main()
