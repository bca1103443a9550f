"""Training module service layer.

Business logic for:
- Module CRUD with cascading deletes
- Assessment creation, replacement and removal
- Listing filters and filter options
"""

import structlog

from training_admin.config.settings import Settings
from training_admin.store import DataStore, TrainingState
from training_admin.utils import utc_now

from .models import Assessment, TrainingModule, normalize_designations
from .schemas import (
    AssessmentInput,
    CreateModuleRequest,
    ModuleFilterOptions,
    UpdateModuleRequest,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ModuleError(Exception):
    """Base training module error."""

    def __init__(self, message: str, code: str = "module_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class TrainingModuleNotFoundError(ModuleError):
    """Module does not exist."""

    def __init__(self, message: str = "Training module not found"):
        super().__init__(message, "module_not_found")


# ==============================================================================
# Module Service
# ==============================================================================


class ModuleService:
    """Service for training modules and their assessments."""

    def __init__(self, store: DataStore, settings: Settings):
        self.store = store
        self.settings = settings

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_module(self, module_id: str) -> TrainingModule:
        """Get a module.

        Raises:
            TrainingModuleNotFoundError: If module doesn't exist
        """
        module = self.store.snapshot().find_module(module_id)
        if module is None:
            raise TrainingModuleNotFoundError
        return module

    def get_assessment(self, module_id: str) -> Assessment | None:
        return self.store.snapshot().find_assessment_for(module_id)

    def list_modules(
        self,
        search: str | None = None,
        module_name: str | None = None,
        designation: str | None = None,
    ) -> list[TrainingModule]:
        """List modules in display order.

        Args:
            search: Case-insensitive substring of category or title
            module_name: Exact category
            designation: Designation the module must target
        """
        needle = search.strip().lower() if search else ""
        modules = []
        for module in self.store.snapshot().modules:
            if needle and not (
                needle in module.module_name.lower()
                or needle in module.sub_module_title.lower()
            ):
                continue
            if module_name and module.module_name != module_name:
                continue
            if designation and designation not in module.designations:
                continue
            modules.append(module)
        return modules

    def filter_options(self) -> ModuleFilterOptions:
        """Distinct categories, and designations from modules and active staff."""
        state = self.store.snapshot()
        module_names = list(dict.fromkeys(m.module_name for m in state.modules))

        designations = {d for m in state.modules for d in m.designations}
        designations.update(
            e.designation for e in state.employees if e.is_active and e.designation
        )

        return ModuleFilterOptions(
            module_names=module_names,
            designations=sorted(designations),
        )

    # ==========================================================================
    # Mutations
    # ==========================================================================

    async def add_module(self, data: CreateModuleRequest) -> TrainingModule:
        """Create a module at the front of the list.

        A module with ``has_test`` and no assessment gets an empty default one.
        """
        async with self.store.transaction() as state:
            module = TrainingModule(
                module_name=data.module_name,
                sub_module_title=data.sub_module_title,
                designations=data.designations,
                content_url=data.content_url,
                content_type=data.content_type,
                file_name=data.file_name,
                slides_url=data.slides_url,
                has_test=data.has_test,
                is_active=data.is_active,
            )
            state.modules.insert(0, module)

            if data.assessment is not None:
                state.assessments.append(
                    self._new_assessment(module.id, data.assessment)
                )
            elif module.has_test:
                state.assessments.append(self._default_assessment(module))

        logger.info(
            "module_created",
            module_id=module.id,
            module_name=module.module_name,
            has_test=module.has_test,
        )
        return module

    async def update_module(
        self, module_id: str, data: UpdateModuleRequest
    ) -> TrainingModule:
        """Apply a partial update.

        Raises:
            TrainingModuleNotFoundError: If module doesn't exist
        """
        async with self.store.transaction() as state:
            module = state.find_module(module_id)
            if module is None:
                raise TrainingModuleNotFoundError

            updates = data.model_dump(exclude_unset=True, exclude={"assessment"})
            for field, value in updates.items():
                if value is None:
                    continue
                if field == "designations":
                    value = normalize_designations(value)
                setattr(module, field, value)
            module.updated_at = utc_now()

            if data.assessment_given:
                self._apply_assessment(state, module, data.assessment)

        logger.info(
            "module_updated",
            module_id=module_id,
            fields=sorted(data.model_fields_set),
        )
        return module

    async def delete_module(self, module_id: str) -> None:
        """Delete a module with its assessment, batch links and records.

        Raises:
            TrainingModuleNotFoundError: If module doesn't exist
        """
        async with self.store.transaction() as state:
            if state.find_module(module_id) is None:
                raise TrainingModuleNotFoundError

            state.modules = [m for m in state.modules if m.id != module_id]
            state.assessments = [
                a for a in state.assessments if a.module_id != module_id
            ]
            state.batch_modules = [
                bm for bm in state.batch_modules if bm.module_id != module_id
            ]
            state.employee_progress = [
                p for p in state.employee_progress if p.module_id != module_id
            ]
            state.post_session_assignments = [
                a for a in state.post_session_assignments if a.module_id != module_id
            ]

        logger.info("module_deleted", module_id=module_id)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _new_assessment(self, module_id: str, data: AssessmentInput) -> Assessment:
        return Assessment(
            module_id=module_id,
            title=data.title,
            description=data.description,
            passing_score=data.passing_score,
            duration_minutes=data.duration_minutes,
            questions=data.question_dicts(),
        )

    def _default_assessment(self, module: TrainingModule) -> Assessment:
        return Assessment(
            module_id=module.id,
            title=f"{module.sub_module_title} - Assessment",
            description=f"Test your knowledge of {module.sub_module_title}",
            passing_score=self.settings.default_passing_score,
            duration_minutes=self.settings.default_test_duration_minutes,
        )

    def _apply_assessment(
        self,
        state: TrainingState,
        module: TrainingModule,
        data: AssessmentInput | None,
    ) -> None:
        """Remove (None), replace keeping the id, or create the assessment."""
        existing = state.find_assessment_for(module.id)

        if data is None:
            state.assessments = [
                a for a in state.assessments if a.module_id != module.id
            ]
            return

        if existing is None:
            state.assessments.append(self._new_assessment(module.id, data))
            return

        existing.title = data.title
        existing.description = data.description
        existing.passing_score = data.passing_score
        existing.duration_minutes = data.duration_minutes
        existing.questions = data.question_dicts()
