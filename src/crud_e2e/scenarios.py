"""The fixed, ordered scenario sequence.

Each scenario is an async function taking the client, the session
context and its own ScenarioResult. Scenarios record assertions on the
result and may capture values into the session for later scenarios.
Exceptions are left to propagate; the runner scores them.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .client import CrudClient, CrudClientError
from .results import ScenarioResult
from .session import SessionContext
from .shared.auth import extract_bearer_token

ROOM_NAME = "TS E2E Test Room"
ROOM_DESCRIPTION = "Created by E2E test"
UPDATED_ROOM_NAME = "Updated TS E2E Room"
UPDATED_ROOM_DESCRIPTION = "Updated by E2E test"
MISSING_ROOM_ID = 999999
HEALTH_UP = "UP"

ScenarioFunc = Callable[[CrudClient, SessionContext, ScenarioResult], Awaitable[None]]


@dataclass(frozen=True)
class Scenario:
    """One step of the sequence."""

    number: int
    title: str
    func: ScenarioFunc
    requires: tuple[str, ...] = ()


async def check_health(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """Health endpoint answers 200 with status UP."""
    response = await client.health()
    result.assert_equals(200, response.status_code, "Health check returns 200")
    body = response.data or {}
    result.assert_true(body.get("status") == HEALTH_UP, "Health check status is UP")


async def create_first_guest(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """Create the first guest and keep its token and user id."""
    response = await client.create_guest_user()
    body = response.data or {}
    result.assert_equals(200, response.status_code, "Create guest user returns 200")
    result.assert_true(body.get("id") is not None, "Guest user has id")
    result.assert_true(body.get("createdAt") is not None, "Guest user has createdAt")

    token = extract_bearer_token(response.headers.get("authorization"))
    if token is None:
        result.record_error("Failed to extract JWT token from Authorization header")
        return

    session.token1 = token
    session.user_id = body.get("id")
    result.note(f"JWT token extracted: {token[:20]}...")
    result.note(f"User ID: {session.user_id}")


async def get_current_user(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """The first guest's token resolves to the first guest."""
    response = await client.get_current_user(token=session.token1)
    result.assert_equals(200, response.status_code, "Get current user returns 200")
    result.assert_equals(
        session.user_id,
        (response.data or {}).get("id"),
        "Current user ID matches created user",
    )


async def get_current_user_unauthenticated(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """Current user without a token is rejected with 401."""
    await result.expect_status(
        client.get_current_user(), 401, "Get current user without token returns 401"
    )


async def list_all_rooms(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """Listing rooms needs no auth and returns an array."""
    response = await client.list_rooms()
    result.assert_equals(200, response.status_code, "List all rooms returns 200")
    result.assert_true(isinstance(response.data, list), "Rooms response is array")


async def create_room(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """Create the shared test room as the first guest."""
    response = await client.create_room(ROOM_NAME, ROOM_DESCRIPTION, token=session.token1)
    body = response.data or {}
    result.assert_equals(201, response.status_code, "Create room returns 201")
    result.assert_true(body.get("name") == ROOM_NAME, "Created room has correct name")
    session.room_id = body.get("id")
    result.note(f"Created room with ID: {session.room_id}")


async def create_room_unauthenticated(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """Creating a room without a token is rejected with 401."""
    await result.expect_status(
        client.create_room("Unauthorized Room"), 401, "Create room without auth returns 401"
    )


async def get_room(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """Fetch the test room by id."""
    response = await client.get_room(session.room_id)
    body = response.data or {}
    result.assert_equals(200, response.status_code, "Get room by ID returns 200")
    result.assert_equals(session.room_id, body.get("id"), "Retrieved room has correct ID")
    result.assert_true(body.get("name") == ROOM_NAME, "Retrieved room has correct name")


async def update_room(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """Rename the test room as its owner."""
    response = await client.update_room(
        session.room_id, UPDATED_ROOM_NAME, UPDATED_ROOM_DESCRIPTION, token=session.token1
    )
    result.assert_equals(200, response.status_code, "Update room returns 200")
    result.assert_true(
        (response.data or {}).get("name") == UPDATED_ROOM_NAME, "Updated room has new name"
    )


async def list_my_rooms(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """The first guest's rooms include the test room."""
    response = await client.list_my_rooms(token=session.token1)
    rooms = response.data
    result.assert_equals(200, response.status_code, "Get my rooms returns 200")
    result.assert_true(isinstance(rooms, list), "My rooms response is array")
    rooms = rooms if isinstance(rooms, list) else []
    result.assert_true(len(rooms) > 0, "My rooms array is not empty")
    result.assert_true(
        any(room.get("id") == session.room_id for room in rooms),
        "My rooms includes the created room",
    )


async def get_missing_room(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """An unknown room id answers 404."""
    await result.expect_status(
        client.get_room(MISSING_ROOM_ID), 404, "Get non-existent room returns 404"
    )


async def update_room_unauthenticated(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """Updating without a token is rejected with 401."""
    await result.expect_status(
        client.update_room(session.room_id, "Unauthorized Update"),
        401,
        "Update room without auth returns 401",
    )


async def update_room_as_other_user(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """A second guest may not update the first guest's room."""
    response = await client.create_guest_user()
    token = extract_bearer_token(response.headers.get("authorization"))
    # Without a second token there is nothing to check; not a failure.
    if token is None:
        result.note("No token returned for second user; skipping ownership check")
        return
    session.token2 = token

    if session.room_id is None:
        result.note("No room to update; skipping ownership check")
        return

    await result.expect_status(
        client.update_room(session.room_id, "Forbidden Update", token=session.token2),
        403,
        "Update another users room returns 403",
    )


async def delete_room(client: CrudClient, session: SessionContext, result: ScenarioResult) -> None:
    """Delete the test room as its owner."""
    response = await client.delete_room(session.room_id, token=session.token1)
    result.assert_equals(204, response.status_code, "Delete room returns 204")


async def get_deleted_room(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """The deleted room is gone."""
    await result.expect_status(
        client.get_room(session.room_id), 404, "Get deleted room returns 404"
    )


async def delete_room_unauthenticated(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """Deleting without a token is rejected with 401."""
    response = await client.create_room("Room to delete", token=session.token1)
    room_id = (response.data or {}).get("id")
    if room_id is None:
        result.record_error("Created room has no id")
        return

    await result.expect_status(
        client.delete_room(room_id), 401, "Delete room without auth returns 401"
    )

    # Cleanup is best-effort and not part of the tally.
    try:
        await client.delete_room(room_id, token=session.token1)
    except CrudClientError as e:
        result.warn(f"Cleanup of room {room_id} failed: {e}")


async def create_room_with_empty_name(
    client: CrudClient, session: SessionContext, result: ScenarioResult
) -> None:
    """An empty room name is rejected with 400."""
    await result.expect_status(
        client.create_room("", token=session.token1),
        400,
        "Create room with empty name returns 400",
    )


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(1, "Health check endpoint", check_health),
    Scenario(2, "Create first guest user and extract JWT token", create_first_guest),
    Scenario(3, "Get current user with valid token", get_current_user, ("token1",)),
    Scenario(
        4,
        "Get current user without token (should fail with 401)",
        get_current_user_unauthenticated,
    ),
    Scenario(5, "List all rooms (no auth required)", list_all_rooms),
    Scenario(6, "Create a room with authentication", create_room, ("token1",)),
    Scenario(
        7,
        "Create room without authentication (should fail with 401)",
        create_room_unauthenticated,
    ),
    Scenario(8, "Get room by ID", get_room, ("room_id",)),
    Scenario(9, "Update room", update_room, ("token1", "room_id")),
    Scenario(10, "Get my rooms (authenticated)", list_my_rooms, ("token1",)),
    Scenario(11, "Get non-existent room (should fail with 404)", get_missing_room),
    Scenario(
        12,
        "Update room without authentication (should fail with 401)",
        update_room_unauthenticated,
        ("room_id",),
    ),
    Scenario(
        13,
        "Create second user and try to update first users room (should fail with 403)",
        update_room_as_other_user,
    ),
    Scenario(14, "Delete room", delete_room, ("token1", "room_id")),
    Scenario(
        15, "Verify room is deleted (should return 404)", get_deleted_room, ("room_id",)
    ),
    Scenario(
        16,
        "Delete room without authentication (should fail with 401)",
        delete_room_unauthenticated,
        ("token1",),
    ),
    Scenario(
        17,
        "Create room with empty name (should fail with 400)",
        create_room_with_empty_name,
        ("token1",),
    ),
)
