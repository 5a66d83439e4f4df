"""
Unit tests for the Go artifact generator.

Covers artifact ordering, output paths and the content of each rendered
layer for the reference User entity.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from entity_codegen.codegen.core.config import GeneratorConfig
from entity_codegen.codegen.core.generator import ArtifactKind, GenerationError
from entity_codegen.codegen.core.templates import TemplateError
from entity_codegen.codegen.languages.go import create_go_generator


USER_PATHS = [
    "models/user.go",
    "repository/user_repository.go",
    "service/user_service.go",
    "api/handlers/user_handler.go",
    "api/dto/user_dto.go",
]


@pytest.fixture
def artifacts(generator, user_context):
    return {artifact.kind: artifact for artifact in generator.generate(user_context)}


class TestPaths:
    def test_code_layer_paths(self, generator):
        assert generator.list_generated_paths("User") == USER_PATHS

    def test_with_migrations(self, generator):
        assert generator.list_generated_paths("User", include_migrations=True) == USER_PATHS + [
            "migrations/user.up.sql",
            "migrations/user.down.sql",
        ]

    @pytest.mark.parametrize("name", ["InvoiceLine", "invoiceLine", "invoice_line", "invoice-line"])
    def test_entity_name_is_snake_cased(self, generator, name):
        assert generator.list_generated_paths(name)[0] == "models/invoice_line.go"

    def test_template_names(self, generator):
        names = [generator.template_name(layout) for layout in generator.layouts]
        assert names == [
            "model.go.j2",
            "repository.go.j2",
            "service.go.j2",
            "handler.go.j2",
            "dto.go.j2",
            "migration_up.sql.j2",
            "migration_down.sql.j2",
        ]


class TestGenerate:
    def test_seven_artifacts_in_order(self, generator, user_context):
        artifacts = generator.generate(user_context)

        assert [a.kind for a in artifacts] == list(ArtifactKind)
        assert [a.relative_path for a in artifacts][:5] == USER_PATHS
        assert [a.layer for a in artifacts][-2:] == ["migration", "migration"]

    def test_artifacts_end_with_single_newline(self, artifacts):
        for artifact in artifacts.values():
            assert artifact.content.endswith("\n")
            assert not artifact.content.endswith("\n\n")
            assert "\n\n\n\n" not in artifact.content

    def test_generation_is_deterministic(self, generator, user_context):
        first = [a.content for a in generator.generate(user_context)]
        second = [a.content for a in generator.generate(user_context)]
        assert first == second

    def test_failing_template_aborts_generation(self, generator, user_context, monkeypatch):
        engine = generator.template_engine
        original = engine.render_template

        def render_template(name, context):
            if name.startswith("service"):
                raise TemplateError("execute", RuntimeError("boom"), name)
            return original(name, context)

        monkeypatch.setattr(engine, "render_template", render_template)

        with pytest.raises(GenerationError) as exc_info:
            generator.generate(user_context)

        assert exc_info.value.artifact_kind is ArtifactKind.SERVICE
        assert exc_info.value.cause.stage == "execute"


class TestModel:
    def test_package_and_imports(self, artifacts):
        content = artifacts[ArtifactKind.MODEL].content

        assert content.startswith("package models\n")
        assert '\t"fmt"\n\t"github.com/google/uuid"\n\t"time"\n' in content

    def test_struct_fields(self, artifacts):
        content = artifacts[ArtifactKind.MODEL].content

        assert "type User struct {" in content
        assert '\tID int64 `json:"-" db:"id"`' in content
        assert '\tUUID uuid.UUID `json:"id" db:"uuid"`' in content
        assert '\tName string `json:"name" db:"name" validate:"required,max=100"`' in content
        assert '\tEmail string `json:"email" db:"email" validate:"required,max=255"`' in content
        assert '\tDeletedAt *time.Time `json:"deleted_at,omitempty" db:"deleted_at"`' in content

    def test_table_name_and_validate(self, artifacts):
        content = artifacts[ArtifactKind.MODEL].content

        assert 'func (user *User) TableName() string {\n\treturn "users"\n}' in content
        assert 'if user.Name == "" {\n\t\treturn fmt.Errorf("name is required")\n\t}' in content
        assert 'if user.Email == "" {' in content

    def test_optional_fields_are_pointers(self, generator, project, make_entity):
        entity = make_entity(
            name="Profile",
            table_name="profiles",
            fields=[
                {"name": "bio", "type": "text", "description": "Short biography"},
                {"name": "age", "type": "int", "required": True},
            ],
        )
        content = generator.generate(generator.prepare_context(project, entity))[0].content

        assert '\tBio *string `json:"bio,omitempty" db:"bio"` // Short biography' in content
        assert '\tAge int64 `json:"age" db:"age" validate:"required"`' in content
        # Numeric zero values are legal, so no emptiness check and no fmt import
        assert "fmt" not in content

    def test_without_external_id_and_timestamps(self, project, user_entity):
        generator = create_go_generator(GeneratorConfig(has_external_id=False, has_timestamps=False))
        artifacts = generator.generate(generator.prepare_context(project, user_entity))
        model = artifacts[0].content
        migration = artifacts[5].content

        assert "uuid" not in model
        assert "CreatedAt" not in model
        assert "uuid" not in migration
        assert "created_at" not in migration
        assert "CREATE INDEX" not in migration

        # Nothing refers to the time package, so neither file imports it
        assert '"time"' not in model
        assert '"time"' not in artifacts[4].content
        assert "time" in generator.prepare_context(project, user_entity).imports

    def test_time_import_kept_for_temporal_fields(self, project, make_entity):
        generator = create_go_generator(GeneratorConfig(has_timestamps=False))
        entity = make_entity(fields=[{"name": "shipped_on", "type": "date", "required": True}])
        artifacts = generator.generate(generator.prepare_context(project, entity))

        assert '\t"time"\n' in artifacts[0].content
        assert '\t"time"\n' in artifacts[4].content


class TestMigrations:
    def test_up_migration_order(self, artifacts):
        content = artifacts[ArtifactKind.MIGRATION_UP].content
        expected_order = [
            "CREATE TABLE IF NOT EXISTS users (",
            "id BIGSERIAL PRIMARY KEY",
            "uuid UUID NOT NULL UNIQUE DEFAULT gen_random_uuid()",
            "name VARCHAR(100) NOT NULL",
            "email VARCHAR(255) NOT NULL",
            "created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP",
            "updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP",
            "deleted_at TIMESTAMP",
            "CREATE INDEX IF NOT EXISTS idx_users_uuid ON users(uuid);",
            "CREATE INDEX IF NOT EXISTS idx_users_deleted_at ON users(deleted_at);",
            "CREATE INDEX IF NOT EXISTS idx_users_created_at ON users(created_at);",
        ]

        positions = [content.index(fragment) for fragment in expected_order]
        assert positions == sorted(positions)

    def test_up_migration_is_well_formed(self, artifacts):
        content = artifacts[ArtifactKind.MIGRATION_UP].content

        assert "    deleted_at TIMESTAMP\n);" in content
        assert content.count("CREATE INDEX") == 3

    def test_defaults_are_quoted(self, generator, project, make_entity):
        entity = make_entity(
            name="Account",
            table_name="accounts",
            fields=[
                {"name": "status", "type": "string", "required": True, "default_value": "active"},
                {"name": "retries", "type": "int", "default_value": "3"},
            ],
        )
        artifacts = generator.generate(generator.prepare_context(project, entity))
        content = artifacts[5].content

        assert "status VARCHAR(255) NOT NULL DEFAULT 'active'," in content
        assert "retries BIGINT DEFAULT 3," in content

    def test_unique_flag_does_not_add_indexes(self, generator, project, make_entity):
        entity = make_entity(fields=[{"name": "code", "type": "string", "required": True, "unique": True}])
        content = generator.generate(generator.prepare_context(project, entity))[5].content

        assert "idx_orders_code" not in content
        assert content.count("CREATE INDEX") == 3

    def test_reserved_identifiers_are_quoted(self, generator, project, make_entity):
        entity = make_entity(
            table_name="sales.order",
            fields=[
                {"name": "user", "type": "string", "required": True},
                {"name": "group", "type": "int"},
            ],
        )
        artifacts = generator.generate(generator.prepare_context(project, entity))
        repository, up, down = artifacts[1].content, artifacts[5].content, artifacts[6].content

        assert 'CREATE TABLE IF NOT EXISTS sales."order" (' in up
        assert '    "user" VARCHAR(255) NOT NULL,' in up
        assert '    "group" BIGINT,' in up
        assert 'CREATE INDEX IF NOT EXISTS idx_order_uuid ON sales."order"(uuid);' in up
        assert down.endswith('DROP TABLE IF EXISTS sales."order";\n')
        assert 'INSERT INTO sales."order" (uuid, "user", "group", created_at, updated_at)' in repository
        assert 'VALUES (:uuid, :user, :group, :created_at, :updated_at)' in repository
        assert '\t\t\t"user" = :user,' in repository

    def test_down_migration_is_single_drop(self, artifacts):
        content = artifacts[ArtifactKind.MIGRATION_DOWN].content
        statements = [
            line for line in content.splitlines() if line.strip() and not line.startswith("--")
        ]
        assert statements == ["DROP TABLE IF EXISTS users;"]


class TestLayers:
    def test_repository(self, artifacts):
        content = artifacts[ArtifactKind.REPOSITORY].content

        assert content.startswith("package repository\n")
        assert '"github.com/acme/billing/internal/models"' in content
        assert "func NewUserRepository(db *sqlx.DB) *UserRepository {" in content
        assert "INSERT INTO users (uuid, name, email, created_at, updated_at)" in content
        assert "VALUES (:uuid, :name, :email, :created_at, :updated_at)" in content
        assert "func (r *UserRepository) GetByUUID(" in content
        assert "SELECT * FROM users WHERE id = $1 AND deleted_at IS NULL" in content
        assert "UPDATE users SET deleted_at = $1" in content
        assert "func (r *UserRepository) Count(ctx context.Context) (int64, error) {" in content

    def test_service(self, artifacts):
        content = artifacts[ArtifactKind.SERVICE].content

        assert content.startswith("package service\n")
        assert '"github.com/acme/billing/internal/repository"' in content
        assert "func NewUserService(repo *repository.UserRepository) *UserService {" in content
        assert "func (s *UserService) List(ctx context.Context, limit, offset int) ([]*models.User, int64, error) {" in content
        assert "if err := user.Validate(); err != nil {" in content

    def test_handler(self, artifacts):
        content = artifacts[ArtifactKind.HANDLER].content

        assert content.startswith("package handlers\n")
        assert '"github.com/gin-gonic/gin"' in content
        assert 'routes := group.Group("/users")' in content
        assert "func (h *UserHandler) ListUsers(c *gin.Context) {" in content
        assert "uuid.Parse(idStr)" in content
        assert "c.Status(http.StatusNoContent)" in content

    def test_dto(self, artifacts):
        content = artifacts[ArtifactKind.DTO].content

        assert content.startswith("package dto\n")
        assert "type CreateUserRequest struct {" in content
        assert "type UpdateUserRequest struct {" in content
        assert '\tName string `json:"name" binding:"required,max=100"`' in content
        assert "func (r UserResponse) FromModel(user *models.User) UserResponse {" in content

    def test_comments_can_be_disabled(self, project, user_entity):
        generator = create_go_generator(GeneratorConfig(add_comments=False))
        artifacts = generator.generate(generator.prepare_context(project, user_entity))

        for artifact in artifacts[:5]:
            assert "\n// " not in artifact.content


class TestReservedEntityNames:
    @pytest.mark.parametrize("name", ["Type", "Range", "Func", "Map", "Select"])
    def test_keyword_entity_gets_safe_receiver(self, generator, project, make_entity, name):
        receiver = name.lower() + "_"
        artifacts = generator.generate(generator.prepare_context(project, make_entity(name=name)))
        model, repository = artifacts[0].content, artifacts[1].content

        assert f"func ({receiver} *{name}) TableName() string {{" in model
        assert f"func ({name.lower()} *" not in model
        assert f"\tvar {receiver} models.{name}\n" in repository

    def test_entity_shadowing_an_imported_package(self, generator, project, make_entity):
        artifacts = generator.generate(generator.prepare_context(project, make_entity(name="Sql")))
        repository = artifacts[1].content

        assert "var sql_ models.Sql" in repository
        assert "var sql models.Sql" not in repository
        assert "sql.ErrNoRows" in repository

    def test_entity_named_like_the_repository_receiver(self, generator, project, make_entity):
        repository = generator.generate(generator.prepare_context(project, make_entity(name="R")))[1].content

        assert "func (r *RRepository) Create(ctx context.Context, r_ *models.R) error {" in repository


class TestConcurrentGeneration:
    def test_shared_generator_renders_independently(self, generator, project, make_entity):
        entities = [
            make_entity(name=f"Entity{index}", table_name=f"entities_{index}", entity_id=index)
            for index in range(1, 9)
        ]
        contexts = [generator.prepare_context(project, entity) for entity in entities]
        functions_before = dict(generator.functions)

        expected = [[a.content for a in generator.generate(context)] for context in contexts]

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(generator.generate, contexts * 4))

        for index, artifacts in enumerate(results):
            assert [a.content for a in artifacts] == expected[index % len(contexts)]
        assert dict(generator.functions) == functions_before


def test_format_code(generator):
    assert generator.format_code("\n\na  \n\n\n\n\nb\t\n\n") == "a\n\n\nb\n"
