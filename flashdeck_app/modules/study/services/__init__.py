from .study_service import StudySessionService

__all__ = ['StudySessionService']
