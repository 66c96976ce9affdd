"""Maven project model.

Reads the parts of ``pom.xml`` hubdetect needs: the project name, the
build directory, declared repositories and the parent link used to find
the top-most project of a multi-module build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from xml.etree.ElementTree import Element

from hubdetect.core.logging import get_logger
from hubdetect.core.models import RemoteRepository
from hubdetect.host.xml_utils import child_text, namespace, parse_xml

LOGGER = get_logger(__name__)

POM_FILE_NAME = "pom.xml"
DEFAULT_BUILD_DIRECTORY = "target"
DEFAULT_PARENT_RELATIVE_PATH = "../pom.xml"

# Repository every Maven build implicitly knows about
MAVEN_CENTRAL = RemoteRepository(id="central", url="https://repo.maven.apache.org/maven2")


@dataclass
class Project:
    """A (possibly nested) Maven project.

    Attributes:
        basedir: Directory holding the project's pom.xml.
        name: ``<name>`` of the project, None when unset.
        group_id: ``<groupId>``, inherited from the parent when unset.
        artifact_id: ``<artifactId>``.
        build_directory: Absolute build output directory.
        repositories: Repositories declared in this pom only.
        parent: Parent project when it is part of the same checkout.
    """

    basedir: Path
    name: Optional[str] = None
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    build_directory: Path = field(default=Path(DEFAULT_BUILD_DIRECTORY))
    repositories: List[RemoteRepository] = field(default_factory=list)
    parent: Optional["Project"] = None

    def __post_init__(self) -> None:
        if not self.build_directory.is_absolute():
            self.build_directory = self.basedir / self.build_directory

    @property
    def display_name(self) -> Optional[str]:
        """Name as Maven reports it: `<name>`, else the artifactId."""
        return self.name or self.artifact_id

    def root(self) -> "Project":
        """Walk up parent links to the top-most project."""
        project = self
        while project.parent is not None:
            project = project.parent
        return project

    @property
    def remote_repositories(self) -> List[RemoteRepository]:
        """Repositories the project resolves from.

        Own declarations first, then inherited ones, then Maven Central.
        A repository id declared closer to the project wins.
        """
        seen = set()
        result: List[RemoteRepository] = []
        project: Optional[Project] = self
        while project is not None:
            for repository in project.repositories:
                if repository.id not in seen:
                    seen.add(repository.id)
                    result.append(repository)
            project = project.parent
        if MAVEN_CENTRAL.id not in seen:
            result.append(MAVEN_CENTRAL)
        return result


def load_project(path: Path) -> Project:
    """Load the project at ``path`` (a directory or a pom.xml file).

    A directory without pom.xml is a bare project: no name, no parent,
    default build directory.

    Raises:
        ConfigurationError: If a pom.xml exists but cannot be parsed.
    """
    path = path.resolve()
    if path.is_file():
        pom = path
        basedir = path.parent
    else:
        basedir = path
        pom = path / POM_FILE_NAME

    if not pom.exists():
        LOGGER.debug(f"No {POM_FILE_NAME} in {basedir}, using a bare project")
        return Project(basedir=basedir)

    return _load_pom(pom)


def _load_pom(pom: Path) -> Project:
    root = parse_xml(pom, "project")
    ns = namespace(root)
    basedir = pom.parent

    parent_element = root.find(f"{ns}parent")
    parent = _load_parent(parent_element, ns, basedir) if parent_element is not None else None

    group_id = child_text(root, f"{ns}groupId")
    if group_id is None and parent_element is not None:
        group_id = child_text(parent_element, f"{ns}groupId")

    repositories = []
    for element in root.findall(f"{ns}repositories/{ns}repository"):
        repo_id = child_text(element, f"{ns}id")
        url = child_text(element, f"{ns}url")
        if not repo_id or not url:
            LOGGER.warning(f"Ignoring repository without id or url in {pom}")
            continue
        repositories.append(RemoteRepository(id=repo_id, url=url.rstrip("/")))

    build_directory = child_text(root, f"{ns}build/{ns}directory") or DEFAULT_BUILD_DIRECTORY
    build_directory = build_directory.replace("${project.basedir}", str(basedir))
    build_directory = build_directory.replace("${basedir}", str(basedir))

    return Project(
        basedir=basedir,
        name=child_text(root, f"{ns}name"),
        group_id=group_id,
        artifact_id=child_text(root, f"{ns}artifactId"),
        build_directory=Path(build_directory),
        repositories=repositories,
        parent=parent,
    )


def _load_parent(element: Element, ns: str, basedir: Path) -> Optional[Project]:
    """Load the parent pom from the checkout, if it is there.

    The pom at ``relativePath`` only counts as the parent when its
    coordinates match the ``<parent>`` declaration, otherwise the parent
    comes from a repository and is not part of this build.
    """
    relative_element = element.find(f"{ns}relativePath")
    if relative_element is not None and not (relative_element.text or "").strip():
        # <relativePath/> disables the lookup in the checkout
        return None
    relative_path = child_text(element, f"{ns}relativePath")
    candidate = (basedir / (relative_path or DEFAULT_PARENT_RELATIVE_PATH)).resolve()
    if candidate.is_dir():
        candidate = candidate / POM_FILE_NAME
    if not candidate.exists():
        return None

    parent = _load_pom(candidate)
    expected = (child_text(element, f"{ns}groupId"), child_text(element, f"{ns}artifactId"))
    if (parent.group_id, parent.artifact_id) != expected:
        LOGGER.debug(
            f"{candidate} is {parent.group_id}:{parent.artifact_id}, "
            f"not the declared parent {expected[0]}:{expected[1]}"
        )
        return None
    return parent

