"""
Output Formatter for exporting detection tables.

Supports two output formats:
- CSV: One row per table row, header with column names
- JSON: Records plus run metadata
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple
from datetime import datetime

import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("csv", "json")


class OutputFormatter:
    """Formatter for exporting detection tables to files.

    Example:
        >>> formatter = OutputFormatter()
        >>> formatter.save(tables.passive, "passive.csv", format="csv")
        >>> formatter.save(tables.active, "active.json", format="json")
    """

    def save(
        self,
        table: pd.DataFrame,
        output_path: str,
        format: str = "csv",
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> str:
        """Save a table to file.

        Args:
            table: Table to save
            output_path: Output file path
            format: Output format (csv, json)
            metadata: Extra metadata for JSON output
            **kwargs: Additional format-specific options

        Returns:
            Path to saved file

        Raises:
            ValueError: If format is not supported
        """
        format = format.lower()
        if format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {format}")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if format == "json":
            return self._save_json(table, output_path, metadata or {}, **kwargs)
        return self._save_csv(table, output_path, **kwargs)

    def save_all(
        self,
        items: List[Tuple[pd.DataFrame, str, Optional[Dict[str, Any]]]],
        format: str = "csv",
    ) -> List[str]:
        """Save several tables, writing either every file or none of them.

        Each table is first written to a hidden sibling file; the final
        paths are only replaced once every table has been written.

        Args:
            items: (table, output_path, metadata) tuples
            format: Output format (csv, json)

        Returns:
            Paths to saved files

        Raises:
            IsADirectoryError: If an output path is an existing directory
        """
        targets = [Path(path) for _, path, _ in items]
        for target in targets:
            if target.is_dir():
                raise IsADirectoryError(f"Output path is a directory: {target}")

        staged: List[Path] = []
        try:
            for (table, _, metadata), target in zip(items, targets):
                tmp = target.with_name(f".{target.name}.tmp")
                staged.append(tmp)
                self.save(table, str(tmp), format=format, metadata=metadata)
        except Exception:
            for tmp in staged:
                tmp.unlink(missing_ok=True)
            raise

        for tmp, target in zip(staged, targets):
            tmp.replace(target)
        return [str(target) for target in targets]

    def _save_csv(
        self,
        table: pd.DataFrame,
        output_path: Path,
        delimiter: str = ",",
        **kwargs,
    ) -> str:
        table.to_csv(output_path, index=False, sep=delimiter)
        logger.info(f"Saved CSV output to {output_path} ({len(table)} rows)")
        return str(output_path)

    def _save_json(
        self,
        table: pd.DataFrame,
        output_path: Path,
        metadata: Dict[str, Any],
        indent: int = 2,
        **kwargs,
    ) -> str:
        from tacsub_sonar import __version__

        data = {
            "metadata": {
                "format_version": "1.0",
                "created": datetime.now().isoformat(),
                "software": "tacsub-sonar",
                "version": __version__,
                **metadata,
            },
            "columns": list(table.columns),
            "records": json.loads(table.to_json(orient="records", double_precision=15)),
        }

        with open(output_path, 'w') as f:
            json.dump(data, f, indent=indent)

        logger.info(f"Saved JSON output to {output_path} ({len(table)} rows)")
        return str(output_path)


def read_table(path: str) -> pd.DataFrame:
    """Read a table written by ``OutputFormatter``.

    Args:
        path: CSV or JSON file

    Returns:
        The table, columns in saved order
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Table file not found: {path}")

    if path.suffix.lower() == ".json":
        with open(path) as f:
            data = json.load(f)
        return pd.DataFrame(data["records"], columns=data["columns"])
    return pd.read_csv(path)
