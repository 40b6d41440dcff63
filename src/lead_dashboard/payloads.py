"""
Wire models for the raw aggregate payloads returned by the backend.

Every field is optional: the backend is an external collaborator and partial
snapshots are expected. Type mismatches (a list where a count belongs, a
string where a list belongs) still fail validation and are reported as
``PayloadFailure`` by the query client.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]
NumericText = Union[int, float, str]


class WirePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def drop_null_items(cls, value: Any) -> Any:
        # A null entry inside a list is skipped rather than failing the whole payload.
        if isinstance(value, list):
            return [item for item in value if item is not None]
        return value


# ---------------------------------------------------------------------------
# Manager dashboard
# ---------------------------------------------------------------------------


class CategoryCount(WirePayload):
    category: Optional[str] = None
    count: Optional[Number] = None


class SourceCount(WirePayload):
    source: Optional[str] = None
    count: Optional[Number] = None


class PipelineStage(WirePayload):
    status: Optional[str] = None
    count: Optional[Number] = None


class DailyCount(WirePayload):
    date: Optional[str] = None
    count: Optional[Number] = None


class LeaderboardWorker(WirePayload):
    worker_id: Optional[str] = Field(None, alias="workerId")
    name: Optional[str] = None
    total_assigned_leads: Optional[Number] = Field(None, alias="totalAssignedLeads")
    converted_percentage: Optional[NumericText] = Field(None, alias="convertedPercentage")


class CampaignStats(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    title: Optional[str] = None
    target_leads: Optional[Number] = Field(None, alias="targetLeads")
    converted_leads: Optional[Number] = Field(None, alias="convertedLeads")
    conversion_rate: Optional[NumericText] = Field(None, alias="conversionRate")


class Notification(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    type: Optional[str] = None
    message: Optional[str] = None
    recipient_type: Optional[str] = Field(None, alias="recipientType")
    created_at: Optional[str] = Field(None, alias="createdAt")


class RecentLead(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
    assigned_to: Optional[str] = Field(None, alias="assignedTo")


class Deadline(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    assigned_to: Optional[str] = Field(None, alias="assignedTo")
    follow_up_dates: Optional[List[str]] = Field(None, alias="followUpDates")


class TitledRef(WirePayload):
    title: Optional[str] = None


class NamedRef(WirePayload):
    name: Optional[str] = None


class CategoryRef(WirePayload):
    category: Optional[str] = None


class BusinessInsights(WirePayload):
    lead_velocity_rate: Optional[NumericText] = Field(None, alias="leadVelocityRate")
    average_lead_response_time: Optional[NumericText] = Field(None, alias="averageLeadResponseTime")
    average_sales_cycle_duration: Optional[NumericText] = Field(None, alias="averageSalesCycleDuration")
    top_lead_source: Optional[str] = Field(None, alias="topLeadSource")
    top_converting_campaign: Optional[TitledRef] = Field(None, alias="topConvertingCampaign")
    most_engaged_worker: Optional[NamedRef] = Field(None, alias="mostEngagedWorker")
    highest_performing_category: Optional[CategoryRef] = Field(None, alias="highestPerformingCategory")


class ManagerDashboardPayload(WirePayload):
    """Response body of ``POST /manager/dashboard``; fields are siblings of ``success``."""

    success: Optional[bool] = None
    total_leads: Optional[Number] = Field(None, alias="totalLeads")
    engaged_leads: Optional[Number] = Field(None, alias="engagedLeads")
    conversation_rate: Optional[NumericText] = Field(None, alias="conversationRate")
    overdue_tasks: Optional[Number] = Field(None, alias="overdueTasks")
    recent_leads: Optional[List[RecentLead]] = Field(None, alias="recentLeads")
    recent_notifications: Optional[List[Notification]] = Field(None, alias="recentNotifications")
    leads_by_category: Optional[List[CategoryCount]] = Field(None, alias="leadsByCategory")
    campaign_performance: Optional[List[CampaignStats]] = Field(None, alias="campaignPerformance")
    upcoming_deadlines: Optional[List[Deadline]] = Field(None, alias="upcomingDeadlines")
    team_leaderboard: Optional[List[LeaderboardWorker]] = Field(None, alias="teamLeaderboard")
    business_insights: Optional[BusinessInsights] = Field(None, alias="businessInsights")
    lead_pipeline: Optional[List[PipelineStage]] = Field(None, alias="leadPipeline")
    daily_leads_last_7_days: Optional[List[DailyCount]] = Field(None, alias="dailyLeadsLast7Days")
    leads_by_source: Optional[List[SourceCount]] = Field(None, alias="leadsBySource")


# ---------------------------------------------------------------------------
# Worker dashboard
# ---------------------------------------------------------------------------


class FollowUpLead(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    company: Optional[str] = None


class FollowUpsToday(WirePayload):
    count: Optional[Number] = None
    data: Optional[List[FollowUpLead]] = None


class CategoryPerformance(WirePayload):
    category_id: Optional[str] = Field(None, alias="categoryId")
    category_name: Optional[str] = Field(None, alias="categoryName")
    total_leads: Optional[Number] = Field(None, alias="totalLeads")
    profitable: Optional[Number] = None
    nonprofitable: Optional[Number] = None


class UpcomingSchedule(WirePayload):
    today: Optional[List[str]] = None
    tomorrow: Optional[List[str]] = None


class OverdueFollowUp(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    position: Optional[str] = None
    follow_up_dates: Optional[List[str]] = Field(None, alias="followUpDates")


class RecentAssignment(WirePayload):
    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    position: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    status: Optional[str] = None


class WorkerDashboardPayload(WirePayload):
    """Response body of ``POST /worker/dashboard``, scoped to the signed-in worker."""

    success: Optional[bool] = None
    total_assigned_leads: Optional[Number] = Field(None, alias="totalAssignedLeads")
    pending_follow_ups: Optional[Number] = Field(None, alias="pendingFollowUps")
    follow_ups_today: Optional[FollowUpsToday] = Field(None, alias="followUpsToday")
    missing_follow_ups: Optional[Number] = Field(None, alias="missingFollowUps")
    performance_by_category: Optional[List[CategoryPerformance]] = Field(None, alias="performanceByCategory")
    upcoming_schedule: Optional[UpcomingSchedule] = Field(None, alias="upcomingSchedule")
    overdue_follow_ups: Optional[List[OverdueFollowUp]] = Field(None, alias="overdueFollowUps")
    recent_assignments: Optional[List[RecentAssignment]] = Field(None, alias="recentAssignments")
