"""Abstract base class for activity transformers."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Sequence

from scheduling import Activity


class BaseTransformer(ABC):
    """Abstract base class defining the interface for activity transformers.

    Extend this class to export activities to other formats
    (e.g., Google Calendar API, CSV, JSON).
    """

    @abstractmethod
    def transform(
        self,
        activities: Sequence[Activity],
        start_date: date,
        end_date: date
    ) -> Any:
        """Transform activities into the target format.

        Args:
            activities: Activities to export. Undated activities repeat
                weekly between start_date and end_date.
            start_date: First day of the exported period.
            end_date: Last day of the exported period.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
