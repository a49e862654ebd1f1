from sqlalchemy import Boolean, Column, String, Integer, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import RoleEnum

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    profile_pic_url = Column(String, nullable=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    is_active = Column(Boolean(), default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    role = relationship("Role", back_populates="users", lazy="joined")
    courses = relationship("Course", back_populates="tutor", cascade="all, delete-orphan", passive_deletes=True)
    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)
    submissions = relationship("Submission", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def role_name(self) -> str:
        # users without a role behave as students
        return self.role.name if self.role else RoleEnum.STUDENT.value
