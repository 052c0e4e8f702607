# app/routers/staff.py

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.auth import get_admin_user, get_current_user
from app.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from app.store import RecordStore, get_store

router = APIRouter(
    prefix="/staff",
    tags=["Staff"],
)


@router.get("", response_model=list[StaffResponse])
def list_staff(
    active_only: bool = Query(False),
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    return store.list_staff(active_only=active_only)


@router.post(
    "",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_staff(
    staff_data: StaffCreate,
    store: RecordStore = Depends(get_store),
    admin_user=Depends(get_admin_user),
):
    return store.create_staff(staff_data.model_dump())


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(
    staff_id: int,
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    staff = store.get_staff(staff_id)

    if not staff:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Staff member not found",
        )

    return staff


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(
    staff_id: int,
    staff_data: StaffUpdate,
    store: RecordStore = Depends(get_store),
    admin_user=Depends(get_admin_user),
):
    staff = store.update_staff(staff_id, staff_data.model_dump())

    if not staff:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Staff member not found",
        )

    return staff


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staff(
    staff_id: int,
    store: RecordStore = Depends(get_store),
    admin_user=Depends(get_admin_user),
):
    if not store.delete_staff(staff_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Staff member not found",
        )

    return None
