"""
Shared fixtures for the dashboard pipeline tests.

Payload fixtures mirror what the backend returns for a populated account; the
fake transport records every request and can hold individual responses back
to simulate slow requests.
"""

import asyncio
import copy
from datetime import date, datetime, timezone

import pytest

from lead_dashboard.transport import DashboardTransport

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = date(2024, 3, 10)


class FakeTransport(DashboardTransport):
    def __init__(self, responses=None, default=None):
        self.responses = list(responses or [])
        self.default = default
        self.calls = []
        self._gates = {}

    def hold(self, index):
        self._gates[index] = asyncio.Event()

    def release(self, index):
        self._gates[index].set()

    async def post(self, path, body):
        index = len(self.calls)
        self.calls.append((path, body))
        gate = self._gates.get(index)
        if gate is not None:
            await gate.wait()
        response = self.responses[index] if index < len(self.responses) else self.default
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(response)


@pytest.fixture
def fake_transport():
    return FakeTransport


@pytest.fixture
def manager_body():
    return {
        "success": True,
        "totalLeads": 120,
        "engagedLeads": 45,
        "conversationRate": "37.50",
        "overdueTasks": 3,
        "recentLeads": [
            {"_id": "l1", "name": "Acme Corp", "position": "CTO", "status": "in-progress", "assignedTo": "w1"},
            {"_id": "l2", "name": "Globex", "status": "follow-up", "assignedTo": None},
            {"_id": "l3", "name": "Initech", "position": "CEO", "status": "new", "assignedTo": "w-gone"},
        ],
        "recentNotifications": [
            {
                "_id": "n1",
                "type": "lead",
                "message": 'Lead "Acme Corp" was created',
                "recipientType": "manager",
                "createdAt": "2024-03-10T11:55:00Z",
            },
            {"_id": "n2", "type": "conversion", "message": "Lead converted", "createdAt": "2024-03-10T09:00:00Z"},
            {
                "_id": "n3",
                "type": "Campaign",
                "message": 'Campaign "<b>Spring</b>" sent',
                "createdAt": "2024-03-08T12:00:00.000Z",
            },
        ],
        "leadsByCategory": [{"category": "Retail", "count": 50}, {"category": "Tech", "count": 70}],
        "campaignPerformance": [
            {"_id": "c1", "title": "Spring", "targetLeads": 100, "convertedLeads": 12, "conversionRate": 12.0},
            {"title": "Summer", "targetLeads": 40, "convertedLeads": 10, "conversionRate": 25},
        ],
        "upcomingDeadlines": [
            {"_id": "d1", "name": "Acme Corp", "assignedTo": "w2", "followUpDates": ["2024-03-12", "2024-03-20"]},
            {"_id": "d2", "name": "Globex", "assignedTo": "w-gone", "followUpDates": []},
        ],
        "teamLeaderboard": [
            {"workerId": "w1", "name": "John Doe", "totalAssignedLeads": 30, "convertedPercentage": 40},
            {"workerId": "w2", "name": "Madonna", "totalAssignedLeads": 12, "convertedPercentage": "25.5"},
        ],
        "businessInsights": {
            "leadVelocityRate": "12.345",
            "averageLeadResponseTime": 4,
            "topConvertingCampaign": {"title": "Spring"},
            "mostEngagedWorker": {"name": "John Doe"},
            "topLeadSource": "Website",
            "averageSalesCycleDuration": "abc",
            "highestPerformingCategory": None,
        },
        "leadPipeline": [{"status": "new", "count": 10}, {"status": "in-progress", "count": 4}],
        "dailyLeadsLast7Days": [
            {"date": "2024-03-08", "count": 2},
            {"date": "2024-03-09", "count": 5},
            {"date": "2024-03-10", "count": 0},
        ],
        "leadsBySource": [
            {"source": "Referral", "count": 3},
            {"source": "Website", "count": 9},
            {"source": "Cold Call", "count": 3},
        ],
    }


@pytest.fixture
def worker_body():
    return {
        "success": True,
        "totalAssignedLeads": 18,
        "pendingFollowUps": 4,
        "followUpsToday": {
            "count": 2,
            "data": [
                {"_id": "a", "name": "Acme", "company": "Acme Inc"},
                {"_id": "b", "name": "Globex"},
            ],
        },
        "missingFollowUps": 1,
        "performanceByCategory": [
            {"categoryId": "c1", "categoryName": "Retail", "totalLeads": 4, "profitable": 3, "nonprofitable": 1},
            {"categoryId": "c2", "categoryName": "Tech", "totalLeads": 0, "profitable": 0, "nonprofitable": 0},
        ],
        "upcomingSchedule": {"today": ["Acme"], "tomorrow": []},
        "overdueFollowUps": [
            {"_id": "o1", "name": "Initech", "position": "CFO", "followUpDates": ["2024-03-01"]},
            {"_id": "o2", "name": "Hooli", "followUpDates": []},
        ],
        "recentAssignments": [
            {"_id": "r1", "name": "Acme", "createdAt": "2024-03-09T10:00:00Z", "status": "follow-up"},
            {
                "_id": "r2",
                "name": "Umbrella",
                "position": "COO",
                "createdAt": "2024-03-08T10:00:00Z",
                "status": "in-progress-review",
            },
        ],
    }
