"""
Test data factories for generating realistic test data.

Usage:
    user = UserFactory.create()
    profile = TechProfileFactory.create(user_id=user.id, availability_mode="all")

Factories build unsaved model instances; tests add and commit them.
"""

import uuid
from decimal import Decimal
from typing import List, Optional

from core.security import hash_password
from db.models import (
    Client,
    ServiceCompletion,
    ServiceRequest,
    TechProfile,
    User,
)


def _unique_suffix() -> str:
    """Generate a unique suffix for test data."""
    return uuid.uuid4().hex[:8]


class UserFactory:
    """Factory for creating staff User instances."""

    @classmethod
    def create(
        cls,
        username: Optional[str] = None,
        email: Optional[str] = None,
        first_name: str = "Sara",
        last_name: str = "Hassan",
        password: Optional[str] = None,
        is_active: bool = True,
    ) -> User:
        suffix = _unique_suffix()

        if username is None:
            username = f"{first_name.lower()}.{last_name.lower()}_{suffix}"
        if email is None:
            email = f"{username}@repairdesk.test"

        return User(
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password) if password else None,
            is_active=is_active,
        )


class ClientFactory:
    """Factory for creating portal Client instances."""

    @classmethod
    def create(
        cls,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        phone: Optional[str] = None,
        is_active: bool = True,
    ) -> Client:
        suffix = _unique_suffix()

        return Client(
            name=name or f"Client {suffix}",
            email=email or f"client_{suffix}@example.com",
            phone=phone or f"555{suffix[:7]}",
            password_hash=hash_password(password) if password else None,
            is_active=is_active,
        )


class ServiceRequestFactory:
    """Factory for creating ServiceRequest instances."""

    @classmethod
    def create(
        cls,
        client_id: Optional[int] = None,
        service_type: str = "Laptop repair",
        description: str = "Screen flickers after boot",
        status: str = "pending",
        assigned_to: Optional[str] = None,
    ) -> ServiceRequest:
        return ServiceRequest(
            client_id=client_id,
            service_type=service_type,
            description=description,
            status=status,
            assigned_to=assigned_to,
        )


class TechProfileFactory:
    """Factory for creating TechProfile instances."""

    @classmethod
    def create(
        cls,
        user_id: str,
        name: Optional[str] = None,
        is_available: bool = True,
        availability_mode: str = "all",
        allowed_client_ids: Optional[List[int]] = None,
        specialties: str = "Hardware, Networking",
    ) -> TechProfile:
        return TechProfile(
            user_id=user_id,
            name=name or f"Tech {_unique_suffix()}",
            personal_email=f"tech_{_unique_suffix()}@example.com",
            is_available=is_available,
            availability_mode=availability_mode,
            allowed_client_ids=allowed_client_ids,
            specialties=specialties,
            hourly_rate=Decimal("45.00"),
        )


class ServiceCompletionFactory:
    """Factory for creating ServiceCompletion instances."""

    @classmethod
    def create(
        cls,
        tech_profile_id: int = 1,
        title: str = "Replaced power supply",
        category: Optional[str] = "Hardware",
        hours_worked: Optional[Decimal] = None,
        client_satisfaction_rating: Optional[int] = None,
    ) -> ServiceCompletion:
        return ServiceCompletion(
            tech_profile_id=tech_profile_id,
            title=title,
            category=category,
            hours_worked=hours_worked,
            client_satisfaction_rating=client_satisfaction_rating,
        )
