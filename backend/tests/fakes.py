"""In-memory availability source for resolver and aggregator tests."""

from datetime import date
from typing import Dict, List, Optional, Sequence

from resource_planner.services.patterns import WeeklyPattern
from resource_planner.services.timeline import ExceptionRecord, ResourceBase


class FakeAvailabilitySource:
    def __init__(self, organization_id: int = 1, timezone: Optional[str] = "UTC"):
        self.organization_id = organization_id
        self.timezone = timezone
        self.resources: Dict[int, ResourceBase] = {}
        self.patterns: Dict[int, WeeklyPattern] = {}
        self.exceptions: List[ExceptionRecord] = []
        self.bulk_pattern_calls = 0

    def add(self, resource: ResourceBase, pattern: Optional[WeeklyPattern] = None) -> ResourceBase:
        self.resources[resource.id] = resource
        if pattern is not None:
            self.patterns[resource.id] = pattern
        return resource

    def get_resource_base(self, resource_id: int) -> Optional[ResourceBase]:
        return self.resources.get(resource_id)

    def get_weekly_pattern(self, resource_id: int) -> Optional[WeeklyPattern]:
        return self.patterns.get(resource_id)

    def get_exceptions(self, resource_id: int, start_date: date, end_date: date) -> List[ExceptionRecord]:
        return [
            e for e in self.exceptions
            if e.resource_id == resource_id and start_date <= e.exception_date <= end_date
        ]

    def list_resources(self, resource_ids: Optional[Sequence[int]] = None) -> List[ResourceBase]:
        if resource_ids is None:
            return list(self.resources.values())
        return [self.resources[rid] for rid in resource_ids if rid in self.resources]

    def get_weekly_patterns(self, resource_ids: Sequence[int]) -> Dict[int, WeeklyPattern]:
        self.bulk_pattern_calls += 1
        return {rid: self.patterns[rid] for rid in resource_ids if rid in self.patterns}

    def get_exceptions_for(
        self, resource_ids: Sequence[int], start_date: date, end_date: date
    ) -> Dict[int, List[ExceptionRecord]]:
        grouped: Dict[int, List[ExceptionRecord]] = {}
        for rid in resource_ids:
            found = self.get_exceptions(rid, start_date, end_date)
            if found:
                grouped[rid] = found
        return grouped

    def get_timezone(self) -> Optional[str]:
        return self.timezone
