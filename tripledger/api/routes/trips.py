"""
Trip and membership routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from tripledger.core.config import settings
from tripledger.core.exceptions import TripNotFoundError
from tripledger.db.session import get_db
from tripledger.models.trip import Trip, TripMember
from tripledger.schemas.member import Member, MemberCreate
from tripledger.schemas.trip import TripCreate, TripResponse, TripDetailResponse
from tripledger.services.snapshot_service import get_trip, member_from_row

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(trip_id: str, db: Session) -> Trip:
    """Fetch a trip, translating a missing trip into a 404."""
    try:
        return get_trip(trip_id, db)
    except TripNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )


def list_members(trip_id: str, db: Session) -> List[Member]:
    rows = db.query(TripMember).filter(
        TripMember.trip_id == trip_id
    ).order_by(TripMember.created_at, TripMember.id).all()
    return [member_from_row(row) for row in rows]


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    new_trip = Trip(
        name=trip_data.name,
        base_currency=trip_data.base_currency or settings.DEFAULT_CURRENCY,
    )
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)
    
    return new_trip


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip_detail(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Get trip details with members."""
    trip = get_trip_or_404(trip_id, db)
    return TripDetailResponse(
        id=trip.id,
        name=trip.name,
        base_currency=trip.base_currency,
        created_at=trip.created_at,
        members=list_members(trip_id, db),
    )


@router.post("/{trip_id}/members", response_model=Member, status_code=status.HTTP_201_CREATED)
async def add_member(
    trip_id: str,
    member_data: MemberCreate,
    db: Session = Depends(get_db)
):
    """Add a member to a trip."""
    get_trip_or_404(trip_id, db)
    
    if member_data.id:
        existing = db.query(TripMember).filter(TripMember.id == member_data.id).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Member id already in use"
            )
    
    member = TripMember(
        trip_id=trip_id,
        display_name=member_data.display_name,
        email=member_data.email,
    )
    if member_data.id:
        member.id = member_data.id
    db.add(member)
    db.commit()
    db.refresh(member)
    
    return member_from_row(member)


@router.get("/{trip_id}/members", response_model=List[Member])
async def get_members(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """List the members of a trip."""
    get_trip_or_404(trip_id, db)
    return list_members(trip_id, db)
