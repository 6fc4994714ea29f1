"""Map project file paths to logical module names.

Two layouts are understood. The classic layout groups files by type
(``app/components/foo.js``, ``app/routes/posts.js``); the pod layout groups
them by feature and names each file by its role (``app/pods/posts/route.js``).
"""

import logging
import posixpath
from pathlib import Path

from glimmer_complete.core.ports.files import FileSource
from glimmer_complete.core.script_ast import find_pod_module_prefix
from glimmer_complete.models import ModuleDescriptor, ModuleKind, ProjectLayout

logger = logging.getLogger(__name__)

_EXTENSIONS = frozenset({".js", ".ts", ".hbs"})
_IGNORED_SEGMENTS = ("/node_modules/", "/tmp/", "/dist/", "/.git/")
_SOURCE_ROOTS = ("/app/", "/addon/")

_CLASSIC_DIRECTORIES: tuple[tuple[tuple[str, ...], ModuleKind], ...] = (
    (("templates", "components"), ModuleKind.COMPONENT),
    (("components",), ModuleKind.COMPONENT),
    (("templates",), ModuleKind.TEMPLATE),
    (("routes",), ModuleKind.ROUTE),
    (("controllers",), ModuleKind.CONTROLLER),
    (("helpers",), ModuleKind.HELPER),
    (("modifiers",), ModuleKind.MODIFIER),
    (("services",), ModuleKind.SERVICE),
    (("models",), ModuleKind.MODEL),
    (("adapters",), ModuleKind.ADAPTER),
    (("serializers",), ModuleKind.SERIALIZER),
    (("transforms",), ModuleKind.TRANSFORM),
    (("utils",), ModuleKind.UTIL),
)

_POD_ROLES: dict[str, ModuleKind] = {
    "component": ModuleKind.COMPONENT,
    "template": ModuleKind.TEMPLATE,
    "route": ModuleKind.ROUTE,
    "controller": ModuleKind.CONTROLLER,
    "helper": ModuleKind.HELPER,
    "modifier": ModuleKind.MODIFIER,
    "service": ModuleKind.SERVICE,
    "model": ModuleKind.MODEL,
    "adapter": ModuleKind.ADAPTER,
    "serializer": ModuleKind.SERIALIZER,
    "transform": ModuleKind.TRANSFORM,
}

_FEATURES_MARKER = "/app/features"
_SHARED_MARKER = "/app/shared/"


def _normalize(path: str | Path) -> str:
    return str(path).replace("\\", "/")


def _relative_to_root(root: str, file_path: str) -> str:
    path = _normalize(file_path)
    if root and path.startswith(root + "/"):
        path = path[len(root) :]
    if not path.startswith("/"):
        path = "/" + path
    return path


def _is_ignored(path: str) -> bool:
    return any(segment in path for segment in _IGNORED_SEGMENTS)


def _split_source_root(path: str) -> str | None:
    """Return the part of ``path`` after its ``app/`` or ``addon/`` directory."""
    indexes = [(path.find(marker), marker) for marker in _SOURCE_ROOTS if marker in path]
    if not indexes:
        return None
    index, marker = min(indexes)
    return path[index + len(marker) :]


class ClassicPathMatcher:
    def __init__(self, root: str) -> None:
        self.root = _normalize(root).rstrip("/")

    def meta_from_path(self, file_path: str | Path) -> ModuleDescriptor | None:
        path = _relative_to_root(self.root, _normalize(file_path))
        stem, extension = posixpath.splitext(posixpath.basename(path))
        if _is_ignored(path) or extension not in _EXTENSIONS or stem in _POD_ROLES:
            return None

        rest = _split_source_root(path)
        if rest is None:
            return None
        segments = rest.split("/")
        for index in range(len(segments) - 1):
            for directory, kind in _CLASSIC_DIRECTORIES:
                end = index + len(directory)
                if tuple(segments[index:end]) == directory and end < len(segments):
                    name = posixpath.splitext("/".join(segments[end:]))[0]
                    return ModuleDescriptor(name=name, type=kind)
        return None


class PodMatcher:
    def __init__(self, root: str, pod_module_prefix: str = "app") -> None:
        self.root = _normalize(root).rstrip("/")
        self.pod_module_prefix = pod_module_prefix.strip("/")

    def meta_from_path(self, file_path: str | Path) -> ModuleDescriptor | None:
        path = _relative_to_root(self.root, _normalize(file_path))
        directory, basename = posixpath.split(path)
        stem, extension = posixpath.splitext(basename)
        kind = _POD_ROLES.get(stem)
        if _is_ignored(path) or kind is None or extension not in _EXTENSIONS:
            return None

        directory += "/"
        prefix = f"/{self.pod_module_prefix}/"
        if prefix in directory:
            name = directory[directory.find(prefix) + len(prefix) :]
        else:
            rest = _split_source_root(directory)
            if rest is None:
                return None
            name = rest
        name = name.rstrip("/")
        if name.startswith("components/"):
            name = name[len("components/") :]
            if kind is ModuleKind.TEMPLATE:
                kind = ModuleKind.COMPONENT
        if not name:
            return None
        return ModuleDescriptor(name=name, type=kind)


def rewrite_module_name(descriptor: ModuleDescriptor, file_path: str | Path, *, pod: bool = False) -> ModuleDescriptor:
    """Apply the feature-folder and shared-folder naming rules.

    Files under ``app/features/`` are named after their enclosing feature;
    files under ``app/shared/`` get a ``shared/`` prefix. The feature rule
    runs first.
    """
    path = _normalize(file_path)
    lowered = path.lower()
    name = descriptor.name

    marker = lowered.find(_FEATURES_MARKER + "/")
    if marker >= 0:
        suffix = path[marker + len(_FEATURES_MARKER) :].replace("/components/", "/")
        segments = ("feature" + suffix).split("/")
        # a pod file contributes both its directory and its role basename
        name = "/".join(segments[: -2 if pod else -1])

    if _SHARED_MARKER in lowered:
        name = "shared/" + name

    if name == descriptor.name:
        return descriptor
    return descriptor.model_copy(update={"name": name})


def detect_pod_module_prefix(root: str | Path, files: FileSource) -> str | None:
    source = files.read_text(Path(root) / "config" / "environment.js")
    if source is None:
        return None
    prefix = find_pod_module_prefix(source)
    if prefix is None or not prefix.strip():
        return None
    return prefix.strip().split("/")[-1]


def layout_for_root(root: str | Path, files: FileSource) -> ProjectLayout:
    prefix = detect_pod_module_prefix(root, files)
    if prefix:
        logger.debug("Detected pod module prefix %r for %s", prefix, root)
        return ProjectLayout(root=_normalize(root), pod_module_prefix=f"app/{prefix}")
    return ProjectLayout(root=_normalize(root))


class PathClassifier:
    """Classify file paths against one project's layout."""

    def __init__(self, layout: ProjectLayout) -> None:
        self.layout = layout
        self._classic = ClassicPathMatcher(layout.root)
        self._pod = PodMatcher(layout.root, layout.pod_module_prefix)

    def classify(self, file_path: str | Path) -> ModuleDescriptor | None:
        descriptor = self._classic.meta_from_path(file_path)
        pod = False
        if descriptor is None:
            descriptor = self._pod.meta_from_path(file_path)
            pod = True
        if descriptor is None:
            return None
        return rewrite_module_name(descriptor, file_path, pod=pod)
