import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from roomadmin.dashboard import Dashboard
from roomadmin.dependencies import get_dashboard, store_failure
from roomadmin.schemas.room import RoomCreate, RoomResponse, RoomUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rooms",
    tags=["rooms"],
)


@router.get("/", response_model=List[RoomResponse])
def get_rooms(dashboard: Dashboard = Depends(get_dashboard)):
    """
    Rooms scheduled for today, newest first, as currently held by the live list.
    Each room carries its inactive / full / active label for this moment.
    """
    return [RoomResponse.from_row(row, dashboard.clock) for row in dashboard.room_list.rows()]


@router.get("/history", response_model=List[RoomResponse])
def get_room_history(dashboard: Dashboard = Depends(get_dashboard)):
    """All rooms, including past and future dates, straight from the store."""
    data, error = dashboard.rooms.list_history()
    if error:
        raise store_failure(dashboard, "Failed to load room history", error)
    return [RoomResponse.from_row(row, dashboard.clock) for row in data]


@router.post("/refresh", response_model=List[RoomResponse])
def refresh_rooms(dashboard: Dashboard = Depends(get_dashboard)):
    """Re-run the full fetch of today's rooms."""
    if not dashboard.room_list.refresh():
        raise store_failure(dashboard, "Failed to load rooms", dashboard.room_list.error)
    return [RoomResponse.from_row(row, dashboard.clock) for row in dashboard.room_list.rows()]


@router.post("/", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(room: RoomCreate, dashboard: Dashboard = Depends(get_dashboard)):
    """
    Create a room.

    - **date_option**: today, tomorrow or day_after_tomorrow.
    - **start_time** / **end_time**: HH:MM, end after start.
    """
    data, error = dashboard.rooms.add_room(room.to_store_row(dashboard.clock))
    if error:
        raise store_failure(dashboard, "Failed to add room", error)
    logger.debug(f"Created room: {data[0].get('id')}")
    dashboard.notifications.success("Room added successfully!")
    return RoomResponse.from_row(data[0], dashboard.clock)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(room_id: str, room: RoomUpdate, dashboard: Dashboard = Depends(get_dashboard)):
    """Replace a room's details; the live list picks the change up from the feed."""
    data, error = dashboard.rooms.update_room(room_id, room.to_store_row(dashboard.clock))
    if error:
        raise store_failure(dashboard, "Failed to update room", error)
    if not data:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    dashboard.notifications.success("Room updated successfully!")
    return RoomResponse.from_row(data[0], dashboard.clock)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(room_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    """Delete a room together with its participation records."""
    _, error = dashboard.rooms.delete_room(room_id)
    if error:
        raise store_failure(dashboard, "Failed to delete room", error)
    logger.debug(f"Deleted room: {room_id}")
    dashboard.notifications.success("Room deleted successfully!")
    return None
