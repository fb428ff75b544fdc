# src/esmbridge/utils/utils_paths.py


from pathlib import Path


def shorten_path_for_display(
    path: Path | str,
    *,
    cwd: Path | None = None,
    config_dir: Path | None = None,
) -> str:
    """Shorten an absolute path for display purposes.

    Tries to make the path relative to cwd first, then config_dir, and picks
    the shortest result. If neither works, returns the absolute path as a string.
    """
    path_obj = Path(path).resolve()

    candidates: list[str] = []

    for base in (cwd, config_dir):
        if not base:
            continue
        try:
            candidates.append(str(path_obj.relative_to(Path(base).resolve())))
        except ValueError:
            pass

    if candidates:
        return min(candidates, key=len) or "."

    return str(path_obj)
