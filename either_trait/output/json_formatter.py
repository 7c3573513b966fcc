"""
JSON report formatter for generation runs.
Records, per interface, whether an implementation was generated, with
integrity hashes tying it to its source.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from either_trait import __version__
from either_trait.utils.hashing import fingerprint, fingerprint_file, pair_fingerprint


class GenerationJSONFormatter:
    """
    Formats generation results as structured JSON.
    """

    SCHEMA_VERSION = "1.0.0"

    def __init__(self, source_file: str, allow_generic_methods: bool = True):
        """
        Args:
            source_file: Module or description the run generated from
            allow_generic_methods: Validator setting used for the run
        """
        self.source_file = source_file
        self.allow_generic_methods = allow_generic_methods
        self.output_file: Optional[str] = None
        self.results: List[Dict[str, Any]] = []

    def add_generated(self,
                      interface_name: str,
                      line_number: Optional[int],
                      interface_source: str,
                      class_name: str,
                      methods: List[str],
                      generated_source: str) -> None:
        """Add an interface whose implementation was generated"""
        source_hash = fingerprint(interface_source)
        generated_hash = fingerprint(generated_source)

        self.results.append({
            "interface": {
                "name": interface_name,
                "line": line_number,
                "source_hash": source_hash
            },
            "generation": {
                "generated": True,
                "status": "generated",
                "class_name": class_name,
                "methods": methods
            },
            "artifacts": {
                "generated_hash": generated_hash,
                "combined_hash": pair_fingerprint(source_hash, generated_hash)
            }
        })

    def add_rejected(self,
                     interface_name: str,
                     line_number: Optional[int],
                     error: Dict[str, Any]) -> None:
        """
        Add an interface that was rejected.

        Args:
            error: The error's `to_dict()`
        """
        self.results.append({
            "interface": {
                "name": interface_name,
                "line": line_number
            },
            "generation": {
                "generated": False,
                "status": "rejected",
                "error": error
            }
        })

    def generate(self) -> Dict[str, Any]:
        """Build the report: metadata, totals, then one entry per interface"""
        total = len(self.results)
        generated = sum(1 for r in self.results if r["generation"]["generated"])

        metadata = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source_file": self.source_file,
            "generator_version": f"either-trait-{__version__}",
            "allow_generic_methods": self.allow_generic_methods
        }
        if self.output_file:
            metadata["output_file"] = self.output_file
            metadata["output_hash"] = fingerprint_file(self.output_file)

        return {
            "schema_version": self.SCHEMA_VERSION,
            "metadata": metadata,
            "summary": {
                "total_interfaces": total,
                "generated": generated,
                "rejected": total - generated
            },
            "results": self.results
        }

    def to_json_string(self, indent: int = 2) -> str:
        return json.dumps(self.generate(), indent=indent)

    def save_to_file(self, output_path: str, indent: int = 2) -> None:
        """Write the report, creating parent directories as needed"""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.generate(), f, indent=indent)
