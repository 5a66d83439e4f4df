"""
Generation service.

Entry point that turns a stored entity into its generated artifacts:
load the entity and its project, prepare the context, render every
artifact and, when an output root is given, write them out.
"""

from pathlib import Path
from typing import Callable, List, Optional, Union

from ..logging_config import get_logger
from .core.generator import CodeGenerator, GenerationResult, GeneratorError
from .core.writer import ArtifactWriteError, ArtifactWriter, FileArtifactWriter
from .registry import get_generator
from .store import EntityStore

logger = get_logger(__name__)

OutputRoot = Optional[Union[str, Path]]


class GeneratorService:
    """Generates artifacts for entities held in an entity store."""

    def __init__(
        self,
        store: EntityStore,
        generator: Optional[CodeGenerator] = None,
        writer_factory: Callable[[Union[str, Path]], ArtifactWriter] = FileArtifactWriter,
    ):
        self.store = store
        self.generator = generator or get_generator("go")
        self.writer_factory = writer_factory

    def generate(self, entity_id: int, output_root: OutputRoot = None) -> GenerationResult:
        """
        Generate every artifact for one entity.

        Args:
            entity_id: Id of the entity in the store
            output_root: Directory to write into; None keeps the result in memory

        Returns:
            GenerationResult with the artifacts in generation order

        Raises:
            NotFoundError: If the entity or its project is missing
            DecodeError: If the entity's field list is malformed
            ValidationError: If the entity has no name, table or fields
            GenerationError: If any artifact fails to render
        """
        entity = self.store.load_entity(entity_id)
        project = self.store.load_project(entity.project_id)

        context = self.generator.prepare_context(project, entity)
        artifacts = self.generator.generate(context)

        result = GenerationResult(
            artifacts=artifacts,
            success=True,
            message=f"Successfully generated {len(artifacts)} files for entity {entity.name}",
            warnings=list(context.warnings),
            metadata={
                "language": self.generator.language_name,
                "entity_name": context.entity_name,
                "table_name": context.table_name,
                "project_id": project.id,
                "module_path": context.module_path,
            },
            entity_id=entity.id,
        )

        for warning in result.warnings:
            logger.warning("%s: %s", context.entity_name, warning)

        if output_root is not None:
            self._write_artifacts(result, output_root)

        return result

    def preview(self, entity_id: int) -> GenerationResult:
        """Generate without writing anything."""
        return self.generate(entity_id, output_root=None)

    def generate_project(self, project_id: int, output_root: OutputRoot = None) -> List[GenerationResult]:
        """
        Generate every entity of a project in store order.

        The first failing entity aborts the call.

        Raises:
            NotFoundError: If the project is missing
            GeneratorError: If the project has no entities
        """
        project = self.store.load_project(project_id)
        entities = self.store.list_entities(project.id)
        if not entities:
            raise GeneratorError(f"Project '{project.name}' has no entities")

        results = []
        for entity in entities:
            results.append(self.generate(entity.id, output_root))

        logger.info("Generated %d entities for project %s", len(results), project.name)
        return results

    def list_generated_paths(self, entity_id: int, include_migrations: bool = False) -> List[str]:
        """Relative paths generate() would produce for an entity."""
        entity = self.store.load_entity(entity_id)
        return self.generator.list_generated_paths(entity.name, include_migrations)

    def _write_artifacts(self, result: GenerationResult, output_root: Union[str, Path]):
        writer = self.writer_factory(output_root)
        for artifact in result.artifacts:
            try:
                writer.write(artifact.relative_path, artifact.content)
            except ArtifactWriteError as e:
                result.write_errors[artifact.relative_path] = str(e.cause)

        result.metadata["output_root"] = str(output_root)
        if result.write_errors:
            result.success = False
            result.message = (
                f"Failed to write {len(result.write_errors)} of {len(result.artifacts)} files"
            )
            logger.error("%s under %s", result.message, output_root)
        else:
            logger.info("Wrote %d files under %s", len(result.artifacts), output_root)
