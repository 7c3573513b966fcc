"""
File I/O utilities
"""

import os
from pathlib import Path
from typing import Optional

from ..core.config import OUTPUT_DIR, OUTPUT_SUFFIX


def output_path_for(input_path: str, output_dir: str = OUTPUT_DIR) -> str:
    """`shapes.py` or `shapes.json` -> `<output_dir>/shapes_either.py`"""
    return os.path.join(output_dir, f"{Path(input_path).stem}{OUTPUT_SUFFIX}.py")


def save_module(source: str, input_path: str,
                output_path: Optional[str] = None,
                output_dir: str = OUTPUT_DIR) -> str:
    """
    Write a generated module to disk.

    Args:
        source: Generated Python source
        input_path: File the source was generated from, used for the name
        output_path: Explicit destination; overrides output_dir
        output_dir: Directory for the default destination

    Returns:
        Path written to
    """
    path = output_path or output_path_for(input_path, output_dir)
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(source)

    return path
