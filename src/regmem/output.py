"""CSV output."""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from regmem.exceptions import OutputError
from regmem.models import OUTPUT_COLUMNS, DeclarationRecord

logger = logging.getLogger(__name__)


def current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_csv(records: Iterable[DeclarationRecord], path: Path) -> int:
    """
    Replace path with a header row plus one row per record.

    Rows go to a temporary file beside the target which is renamed over it
    once complete. Returns the number of rows written.
    """
    path = Path(path)
    tmp_path = None
    count = 0
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            delete=False,
            dir=str(path.parent),
            prefix=path.name,
            suffix=".tmp",
            newline="",
        ) as tmp:
            tmp_path = Path(tmp.name)
            writer = csv.DictWriter(tmp, fieldnames=OUTPUT_COLUMNS, lineterminator="\n")
            writer.writeheader()
            for record in records:
                writer.writerow(record.to_row())
                count += 1
            tmp.flush()
            os.fsync(tmp.fileno())
        # NamedTemporaryFile is owner-only; publish with the usual umask mode
        os.chmod(tmp_path, 0o666 & ~current_umask())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise OutputError(str(path), e) from e

    logger.info(f"Wrote {count} rows to {path}")
    return count
