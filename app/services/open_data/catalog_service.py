"""
Catalog lookups: dormitory list, amenity list and accepted applications
by room or academic year.
"""

from typing import List

from app.core.exceptions import InvalidValueError, NotFoundError
from app.models.base.enums import Amenity
from app.services.base import BaseService, ServiceResult
from app.schemas.open_data.catalog import AcceptedApplicationResponse, AmenityInfo, DormitorySummary
from app.utils.date_utils import DateUtilsError, parse_academic_year


class CatalogService(BaseService):
    """Service for simple open-data listings."""

    def list_dormitories(self) -> ServiceResult[List[DormitorySummary]]:
        """Dormitories ordered by name, then ID."""
        try:
            dormitories = self.repositories.dormitories.find_all_by_name()
            return ServiceResult.success(
                [DormitorySummary.model_validate(dorm) for dorm in dormitories],
                metadata={"count": len(dormitories)},
            )

        except Exception as e:
            return self._handle_exception(e, "list dormitories")

    def list_amenities(self) -> ServiceResult[List[AmenityInfo]]:
        """The known amenity tags with readable labels."""
        return ServiceResult.success(
            [AmenityInfo(tag=amenity.value, label=amenity.label) for amenity in Amenity]
        )

    def get_room_applications(self, room_id: str) -> ServiceResult[List[AcceptedApplicationResponse]]:
        """
        Accepted applications occupying a room.

        Args:
            room_id: Room to list

        Returns:
            ServiceResult containing the room's accepted applications,
            NOT_FOUND when the room does not exist
        """
        try:
            if self.repositories.rooms.find_by_id(room_id) is None:
                raise NotFoundError("Room", room_id)

            accepted = self.repositories.accepted_applications.find_by_room(room_id)
            return ServiceResult.success(
                [AcceptedApplicationResponse.model_validate(a) for a in accepted],
                metadata={"count": len(accepted)},
            )

        except Exception as e:
            return self._handle_exception(e, "list room applications", room_id)

    def get_accepted_by_academic_year(
        self,
        academic_year: str,
    ) -> ServiceResult[List[AcceptedApplicationResponse]]:
        """
        Accepted applications of one academic year.

        Args:
            academic_year: Year label formatted YYYY/YYYY

        Returns:
            ServiceResult containing the year's accepted applications,
            INVALID_VALUE when the label is malformed
        """
        try:
            try:
                parse_academic_year(academic_year)
            except DateUtilsError as e:
                raise InvalidValueError(str(e), field="academic_year", value=academic_year) from e

            accepted = self.repositories.accepted_applications.find_by_academic_year(academic_year)
            return ServiceResult.success(
                [AcceptedApplicationResponse.model_validate(a) for a in accepted],
                metadata={"count": len(accepted), "academic_year": academic_year},
            )

        except Exception as e:
            return self._handle_exception(e, "list accepted applications by academic year", academic_year)
