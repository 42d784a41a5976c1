"""
SQLAlchemy ORM models for database tables.

Relations are plain foreign-key columns; cascades on delete are issued
explicitly by the repositories (child rows first) and mirrored by
ON DELETE CASCADE on the foreign keys.
"""
from sqlalchemy import Column, String, Text, DateTime, Index, ForeignKey, Integer, Numeric, Enum
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from franchisenexus.domain.roles import Role

Base = declarative_base()


# ============================================
# Identity
# ============================================

class UserModel(Base):
    """
    Registered users (admins, franchisees and franchisors).

    The email doubles as the login name and the token subject.
    Role is fixed at registration and never updated.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)  # bcrypt hash
    phone_number = Column(String(50), nullable=True)
    profile_image = Column(String(500), nullable=True)  # Opaque reference, not processed
    role = Column(Enum(Role), nullable=False)
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )


# ============================================
# Marketplace
# ============================================

class BusinessModel(Base):
    """Franchise businesses, each owned by one franchisor."""
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    industry = Column(String(100), nullable=True)
    location = Column(String(200), nullable=True)
    logo = Column(String(500), nullable=True)
    website = Column(String(500), nullable=True)
    investment_required = Column(Numeric(15, 2), nullable=True)
    founded = Column(String(50), nullable=True)
    number_of_locations = Column(Integer, nullable=True)
    owner_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    __table_args__ = (
        Index('idx_businesses_owner_id', 'owner_id'),
        Index('idx_businesses_industry', 'industry'),
    )


class FranchiseModel(Base):
    """Franchise opportunities published under a business."""
    __tablename__ = "franchises"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    industry = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    logo = Column(String(500), nullable=True)
    initial_investment = Column(Numeric(15, 2), nullable=True)
    ongoing_fees = Column(Numeric(15, 2), nullable=True)
    contract_length = Column(Integer, nullable=True)
    requirements = Column(Text, nullable=True)
    support_provided = Column(Text, nullable=True)
    training_program = Column(Text, nullable=True)
    business_id = Column(Integer, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False)

    __table_args__ = (
        Index('idx_franchises_business_id', 'business_id'),
        Index('idx_franchises_industry', 'industry'),
        Index('idx_franchises_location', 'country', 'city'),
    )


class ApplicationModel(Base):
    """
    Franchise applications submitted by franchisees.

    status is an open string (initially "Pending").
    submission_date is assigned once by the server at creation.
    resume and financial_statement are opaque document references.
    """
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    status = Column(String(50), nullable=False)
    submission_date = Column(DateTime, nullable=False)
    cover_letter = Column(Text, nullable=True)
    resume = Column(String(500), nullable=True)
    financial_statement = Column(String(500), nullable=True)
    applicant_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    franchise_id = Column(Integer, ForeignKey('franchises.id', ondelete='CASCADE'), nullable=False)

    __table_args__ = (
        Index('idx_applications_applicant_id', 'applicant_id'),
        Index('idx_applications_franchise_id', 'franchise_id'),
        Index('idx_applications_status', 'status'),
    )
