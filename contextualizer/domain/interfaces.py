# contextualizer/domain/interfaces.py

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .models import Annotation, Snippet


class AnnotationError(RuntimeError):
    """Raised when the remote annotation step fails as a whole."""


class AnnotationPort(ABC):
    """
    Port for any remote annotation model.
    Receives snippets numbered 1-based in the order given.
    """

    @abstractmethod
    def annotate(
        self,
        keyword: str,
        snippets: Sequence[Snippet],
        model: Optional[str] = None,
    ) -> List[Annotation]: ...


class SearchHistoryPort(ABC):

    @abstractmethod
    def record(self, term: str) -> List[str]:
        """
        Put term first in the history and return the updated list,
        most recent first.
        """
        ...

    @abstractmethod
    def list_terms(self) -> List[str]: ...

    @abstractmethod
    def clear(self) -> None: ...
