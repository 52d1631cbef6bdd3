"""
Tests for the dashboard headline counts.
"""

import httpx
import pytest

from console.dashboard import load_dashboard


@pytest.mark.asyncio
class TestDashboard:
    async def test_counts_each_collection(self, services, seeded_api):
        stats = await load_dashboard(services)

        assert [(s.title, s.value) for s in stats] == [
            ("Total Products", 2),
            ("Total Events", 2),
            ("Partners", 2),
            ("Active Subscriptions", 1),
        ]
        assert all(s.available for s in stats)
        assert [s.href for s in stats] == ["/products", "/events", "/partners", "/subscriptions"]

    async def test_failed_list_only_zeroes_its_own_card(self, services, seeded_api, notifications):
        seeded_api.fail("GET", "/events", httpx.ConnectError)

        stats = {s.title: s for s in await load_dashboard(services)}

        assert stats["Total Events"].value == 0
        assert stats["Total Events"].available is False
        assert stats["Total Products"].value == 2
        assert stats["Active Subscriptions"].value == 1
        assert [n.description for n in notifications.drain()] == ["Failed to fetch events"]

    async def test_empty_catalog(self, services, fake_api):
        stats = await load_dashboard(services)
        assert [s.value for s in stats] == [0, 0, 0, 0]

    async def test_stat_serializes(self, services, seeded_api):
        stats = await load_dashboard(services)
        assert stats[0].to_dict() == {
            "title": "Total Products",
            "value": 2,
            "description": "Active products in system",
            "href": "/products",
            "available": True,
        }
