from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable

def list_dirs(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    return [p for p in root.iterdir() if p.is_dir()]

def list_series_dirs(roots: Iterable[Path], keep: Callable[[Path], bool] | None = None) -> list[Path]:
    # visible directories of every root that pass keep, first root wins on a name clash
    seen: set[str] = set()
    out = []
    for root in roots:
        for p in list_dirs(Path(root)):
            if p.name.startswith(".") or p.name in seen:
                continue
            if keep is not None and not keep(p):
                continue
            seen.add(p.name)
            out.append(p)
    return out

def list_entries(roots: Iterable[Path], relative: str) -> list[Path]:
    out = []
    for root in roots:
        d = Path(root) / relative
        if d.is_dir():
            out.extend(d.iterdir())
    return out

def modified_at(path: Path) -> datetime:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except OSError:
        return datetime.fromtimestamp(0, tz=timezone.utc)

## roots are walked in order; missing roots are skipped
