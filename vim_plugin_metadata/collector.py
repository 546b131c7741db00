import logging
from pathlib import Path
from typing import Callable, Iterator, List, NamedTuple, Optional

from .errors import ModuleReadError, PluginRootError
from .parser import PathLike, parse_module_from_file, read_text
from .schemas import VimModule, VimPlugin
from .settings import ScanSettings

logger = logging.getLogger(__name__)


class DirEntry(NamedTuple):
    name: str
    is_dir: bool


ListDir = Callable[[Path], List[DirEntry]]
OnError = Optional[Callable[[ModuleReadError], None]]


def list_directory(path: Path) -> List[DirEntry]:
    return [DirEntry(child.name, child.is_dir()) for child in Path(path).iterdir()]


def _walk(
    root: Path, relative: Path, list_dir: ListDir, settings: ScanSettings, depth: int, onerror: OnError
) -> Iterator[Path]:
    try:
        entries = list_dir(root / relative)
    except OSError as e:
        logger.warning("Skipping unreadable directory %s: %s", relative, e)
        if onerror is not None:
            onerror(ModuleReadError(root / relative, e))
        return
    for entry in entries:
        if entry.is_dir:
            if entry.name in settings.excluded_dirs:
                continue
            if settings.skip_hidden and entry.name.startswith('.'):
                continue
            if depth >= settings.max_depth:
                logger.warning("Not descending into %s: deeper than %d levels", relative / entry.name, settings.max_depth)
                continue
            yield from _walk(root, relative / entry.name, list_dir, settings, depth + 1, onerror)
        elif Path(entry.name).suffix in settings.extensions:
            yield relative / entry.name


def iter_plugin_files(
    root: PathLike,
    list_dir: ListDir = list_directory,
    settings: Optional[ScanSettings] = None,
    onerror: OnError = None,
) -> Iterator[Path]:
    """Yield paths (relative to root) of all vimscript files in a plugin.

    Root-level special files come first, then each section directory in
    settings.sections order, files within a section sorted by path. after/
    subtrees are never entered. Subdirectories that can't be listed are
    logged, passed to onerror if given, and skipped.

    Raises PluginRootError if root can't be listed.
    """
    root = Path(root)
    settings = settings or ScanSettings()
    try:
        top = {entry.name: entry for entry in list_dir(root)}
    except OSError as e:
        raise PluginRootError(root, e) from e

    for name in settings.root_files:
        entry = top.get(name)
        if entry is not None and not entry.is_dir:
            yield Path(name)
    for section in settings.sections:
        entry = top.get(section)
        if entry is None or not entry.is_dir:
            continue
        files = _walk(root, Path(section), list_dir, settings, 1, onerror)
        # Part-wise, so autoload/sample/util.vim sorts before autoload/sample.vim.
        yield from sorted(files, key=lambda path: path.parts)


def parse_plugin_directory(
    root: PathLike,
    list_dir: ListDir = list_directory,
    read: Callable[[PathLike], str] = read_text,
    settings: Optional[ScanSettings] = None,
    onerror: OnError = None,
) -> VimPlugin:
    """Parse every vimscript file of the plugin at root.

    Module paths are relative to root. Files that can't be read are logged,
    passed to onerror if given, and left out; only an unusable root raises.
    """
    root = Path(root)
    modules: List[VimModule] = []
    for relative in iter_plugin_files(root, list_dir, settings, onerror):
        try:
            module = parse_module_from_file(root / relative, read)
        except ModuleReadError as e:
            logger.warning("Skipping %s: %s", relative, e.reason)
            if onerror is not None:
                onerror(e)
            continue
        modules.append(module.model_copy(update={"path": relative}))
    logger.info("Parsed %s modules from %s", len(modules), root)
    return VimPlugin(content=modules)
