"""
Unit tests for the use case transaction pattern.
"""

import pytest
from unittest.mock import Mock, AsyncMock, patch

from timesheets.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from timesheets.domain.models.base import ValidationError, ConflictError
from timesheets.domain.models.profile import Actor, Role
from timesheets.domain.events.timesheet_events import WeekSubmitted


ACTOR = Actor(id="user-1", org_id="org-1", role=Role.CONTRACTOR)


class RecordingCommand(CommandUseCase):
    """Records an event, then optionally fails."""

    def __init__(self, session, error=None):
        super().__init__(session)
        self.error = error

    async def _execute_command_logic(self, actor, request):
        self.record_event(WeekSubmitted(org_id=actor.org_id, user_id=actor.id, affected=1))
        if self.error:
            raise self.error
        return {"ok": True, "request": request}


class EchoQuery(QueryUseCase):
    async def _execute_business_logic(self, actor, request):
        return request


class TestCommandUseCase:
    """Test cases for CommandUseCase."""

    async def test_commits_then_publishes(self):
        session = Mock()
        publish = AsyncMock()

        with patch("timesheets.application.use_cases.base_use_case.publish_event", publish):
            result = await RecordingCommand(session).execute(ACTOR, "payload")

        assert result == {"ok": True, "request": "payload"}
        session.commit.assert_called_once()
        session.rollback.assert_not_called()
        publish.assert_awaited_once()
        assert isinstance(publish.await_args.args[0], WeekSubmitted)

    async def test_rolls_back_and_drops_events_on_error(self):
        session = Mock()
        publish = AsyncMock()
        use_case = RecordingCommand(session, error=ConflictError("already handled"))

        with patch("timesheets.application.use_cases.base_use_case.publish_event", publish):
            with pytest.raises(ConflictError):
                await use_case.execute(ACTOR)

        session.commit.assert_not_called()
        session.rollback.assert_called_once()
        publish.assert_not_awaited()
        assert use_case.events == []

    async def test_unexpected_errors_propagate(self):
        session = Mock()
        with pytest.raises(RuntimeError):
            await RecordingCommand(session, error=RuntimeError("boom")).execute(ACTOR)
        session.rollback.assert_called_once()


class TestQueryUseCase:
    """Test cases for BaseUseCase.execute."""

    async def test_requires_actor(self):
        with pytest.raises(ValidationError):
            await EchoQuery().execute(None, "x")

    async def test_runs_request_validation(self):
        request = Mock()
        request.validate_request.side_effect = ValidationError("bad range", "end")

        with pytest.raises(ValidationError):
            await EchoQuery().execute(ACTOR, request)

    async def test_returns_result(self):
        assert await EchoQuery().execute(ACTOR, 42) == 42
