"""Download the Semeion handwritten digit dataset."""

from __future__ import annotations

import argparse
from pathlib import Path

from pysynapse.tasks.digits import SEMEION_URL, download_semeion


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download the Semeion handwritten digit dataset")
    parser.add_argument("--url", type=str, default=SEMEION_URL, help="Location of semeion.data")
    parser.add_argument(
        "--out-dir",
        type=str,
        default="data",
        help="Directory to store the downloaded dataset",
    )
    parser.add_argument(
        "--filename",
        type=str,
        default="semeion.data",
        help="Name of the file written inside --out-dir",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-download even if the target file already exists",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    destination = Path(args.out_dir) / args.filename
    if destination.exists() and not args.force:
        print(f"Dataset already exists at {destination}, skipping download.")
        return
    print(f"Downloading {args.url} -> {destination}")
    download_semeion(destination, url=args.url, force=True)
    print("Download complete.")


if __name__ == "__main__":
    main()
