from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from microscroll.application.study.use_cases.analytics_use_case import StudyAnalyticsUseCase
from microscroll.application.study.use_cases.due_cards_use_case import DueCardsUseCase
from microscroll.application.study.use_cases.review_card_use_case import ReviewCardUseCase
from microscroll.application.study.use_cases.speed_results_use_case import SpeedResultsUseCase
from microscroll.application.study.use_cases.study_session_use_case import StudySessionUseCase
from microscroll.domain.study.services.due_selector import DueSelector
from microscroll.domain.study.services.scheduling_policy import SchedulingPolicy
from microscroll.domain.study.services.streak_calculator import StreakCalculator
from microscroll.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from microscroll.infrastructure.study.repositories import (
    CardProgressRepository,
    CardRepository,
    DeckRepository,
    StudySessionRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    deck_repository = providers.Factory(DeckRepository, db=db)
    card_repository = providers.Factory(CardRepository, db=db)
    card_progress_repository = providers.Factory(CardProgressRepository, db=db)
    study_session_repository = providers.Factory(StudySessionRepository, db=db)
    unit_of_work = providers.Factory(SQLAlchemyUnitOfWork, db=db)

    # Domain services (pure domain logic, no db)
    scheduling_policy = providers.Singleton(SchedulingPolicy)
    due_selector = providers.Singleton(DueSelector)
    streak_calculator = providers.Singleton(StreakCalculator)

    # Study module, application use cases
    study_session_use_case = providers.Factory(
        StudySessionUseCase,
        session_repository=study_session_repository,
        deck_access=deck_repository,
        uow=unit_of_work,
        streak_calculator=streak_calculator,
    )

    review_card_use_case = providers.Factory(
        ReviewCardUseCase,
        session_repository=study_session_repository,
        progress_repository=card_progress_repository,
        card_repository=card_repository,
        deck_access=deck_repository,
        uow=unit_of_work,
        scheduling_policy=scheduling_policy,
    )

    speed_results_use_case = providers.Factory(
        SpeedResultsUseCase,
        session_repository=study_session_repository,
        progress_repository=card_progress_repository,
        card_repository=card_repository,
        deck_access=deck_repository,
        uow=unit_of_work,
        scheduling_policy=scheduling_policy,
    )

    due_cards_use_case = providers.Factory(
        DueCardsUseCase,
        card_repository=card_repository,
        deck_access=deck_repository,
        due_selector=due_selector,
    )

    study_analytics_use_case = providers.Factory(
        StudyAnalyticsUseCase,
        session_repository=study_session_repository,
        progress_repository=card_progress_repository,
        card_repository=card_repository,
        deck_access=deck_repository,
        streak_calculator=streak_calculator,
    )


# Initialize container
container = Container()
