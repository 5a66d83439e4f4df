"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and the
artifact orchestration shared between them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .context import ContextPreparer, GenerationContext
from .naming import to_snake_case
from .schema import Entity, Project
from .templates import FunctionTable, TemplateEngine, TemplateError, build_default_functions, create_template_engine
from .types import TypeMapper

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class GenerationError(GeneratorError):
    """A single artifact failed to render; the whole generation is aborted."""

    def __init__(self, artifact_kind: "ArtifactKind", cause: Exception):
        self.artifact_kind = artifact_kind
        self.cause = cause
        super().__init__(f"Failed to generate {artifact_kind.value}: {cause}")


class ArtifactKind(Enum):
    """Artifact kinds in generation order."""

    MODEL = "model"
    REPOSITORY = "repository"
    SERVICE = "service"
    HANDLER = "handler"
    DTO = "dto"
    MIGRATION_UP = "migration_up"
    MIGRATION_DOWN = "migration_down"

    @property
    def layer(self) -> str:
        if self in (ArtifactKind.MIGRATION_UP, ArtifactKind.MIGRATION_DOWN):
            return "migration"
        return self.value

    @property
    def is_migration(self) -> bool:
        return self.layer == "migration"


@dataclass(frozen=True)
class ArtifactLayout:
    """Where an artifact kind lives and which template renders it."""

    kind: ArtifactKind
    directory: str
    suffix: str = ""
    extension: Optional[str] = None  # None: the generator's file extension


ARTIFACT_LAYOUTS = (
    ArtifactLayout(ArtifactKind.MODEL, "models"),
    ArtifactLayout(ArtifactKind.REPOSITORY, "repository", "_repository"),
    ArtifactLayout(ArtifactKind.SERVICE, "service", "_service"),
    ArtifactLayout(ArtifactKind.HANDLER, "api/handlers", "_handler"),
    ArtifactLayout(ArtifactKind.DTO, "api/dto", "_dto"),
    ArtifactLayout(ArtifactKind.MIGRATION_UP, "migrations", extension=".up.sql"),
    ArtifactLayout(ArtifactKind.MIGRATION_DOWN, "migrations", extension=".down.sql"),
)


@dataclass(frozen=True)
class GeneratedArtifact:
    """One rendered output file."""

    kind: ArtifactKind
    relative_path: str
    content: str

    @property
    def layer(self) -> str:
        return self.kind.layer


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    layouts = ARTIFACT_LAYOUTS

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.type_mapper = self.create_type_mapper()
        self.functions = self.build_function_table()
        self.preparer = ContextPreparer(self.type_mapper, self.config)
        self._template_engine = create_template_engine(
            self.get_template_directory(), self.functions
        )

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    @abstractmethod
    def create_type_mapper(self) -> TypeMapper:
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    def build_function_table(self) -> FunctionTable:
        """Helpers exposed to templates; subclasses add type/tag helpers."""
        return build_default_functions()

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        return self._template_engine

    def template_name(self, layout: ArtifactLayout) -> str:
        return f"{layout.kind.value}{self._extension(layout)}.j2"

    def _extension(self, layout: ArtifactLayout) -> str:
        extension = layout.extension or self.file_extension
        # ".up.sql" -> ".sql"
        return "." + extension.rsplit(".", 1)[-1]

    # Paths

    def relative_path(self, layout: ArtifactLayout, entity_name: str) -> str:
        extension = layout.extension or self.file_extension
        return f"{layout.directory}/{to_snake_case(entity_name)}{layout.suffix}{extension}"

    def list_generated_paths(self, entity_name: str, include_migrations: bool = False) -> List[str]:
        """
        Relative paths of the generated files, in generation order.

        Args:
            entity_name: Entity name in any casing style
            include_migrations: Also list the two migration scripts

        Returns:
            Ordered list of relative paths
        """
        return [
            self.relative_path(layout, entity_name)
            for layout in self.layouts
            if include_migrations or not layout.kind.is_migration
        ]

    # Generation

    def prepare_context(self, project: Project, entity: Entity) -> GenerationContext:
        return self.preparer.prepare(project, entity)

    def render_artifact(self, layout: ArtifactLayout, context: GenerationContext) -> GeneratedArtifact:
        """
        Render one artifact.

        Raises:
            TemplateError: If the template fails to parse or execute
        """
        code = self.template_engine.render_template(
            self.template_name(layout), self.build_template_context(context)
        )
        return GeneratedArtifact(
            kind=layout.kind,
            relative_path=self.relative_path(layout, context.entity_name),
            content=self.format_code(code),
        )

    def build_template_context(self, context: GenerationContext) -> Dict[str, Any]:
        template_context = context.to_template_context()
        template_context["add_comments"] = self.config.add_comments
        return template_context

    def generate(self, context: GenerationContext) -> List[GeneratedArtifact]:
        """
        Render every artifact for a prepared context.

        Generation is all-or-nothing: the first failing artifact aborts the
        call and no partial list is returned.

        Raises:
            GenerationError: Naming the artifact kind that failed
        """
        artifacts = []
        for layout in self.layouts:
            try:
                artifacts.append(self.render_artifact(layout, context))
            except TemplateError as e:
                logger.error("Failed to generate %s for %s: %s", layout.kind.value, context.entity_name, e)
                raise GenerationError(layout.kind, e) from e

        logger.info("Generated %d artifacts for %s", len(artifacts), context.entity_name)
        return artifacts

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, allows at most two consecutive blank
        lines and ends the text with a single newline.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


@dataclass
class GenerationResult:
    """Container for generation results and metadata."""

    artifacts: List[GeneratedArtifact] = field(default_factory=list)
    success: bool = True
    message: str = ""
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    write_errors: Dict[str, str] = field(default_factory=dict)
    entity_id: Optional[int] = None

    @property
    def paths(self) -> List[str]:
        return [artifact.relative_path for artifact in self.artifacts]

    def get(self, kind: ArtifactKind) -> Optional[GeneratedArtifact]:
        for artifact in self.artifacts:
            if artifact.kind == kind:
                return artifact
        return None
