from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Float, Boolean, DateTime, Text, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql import func
import uuid
from datetime import datetime, date
from app.core.db import Base
import sqlalchemy as sa

# Postgres arrays in production, JSON lists on SQLite
TagList = ARRAY(String).with_variant(JSON(), "sqlite")
IdList = ARRAY(String(36)).with_variant(JSON(), "sqlite")


class ClothingItem(Base):
    __tablename__ = "clothing_item"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    color: Mapped[str | None] = mapped_column(String(64), nullable=True)
    material: Mapped[str | None] = mapped_column(String(128), nullable=True)
    season_tags: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    occasion_tags: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    times_worn: Mapped[int] = mapped_column(Integer, default=0)
    last_worn_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Outfit(Base):
    __tablename__ = "outfit"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(Text)
    item_ids: Mapped[list[str] | None] = mapped_column(IdList, nullable=True)
    season_tags: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    occasion_tags: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    times_worn: Mapped[int] = mapped_column(Integer, default=0)
    last_worn_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    source: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class OutfitLog(Base):
    __tablename__ = "outfit_log"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    outfit_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), sa.ForeignKey("outfit.id", ondelete="CASCADE"))
    worn_date: Mapped[date] = mapped_column(sa.Date())
    time_of_day: Mapped[str | None] = mapped_column(String(16), nullable=True)
    weather_condition: Mapped[str | None] = mapped_column(Text, nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    activity: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class DailySuggestion(Base):
    __tablename__ = "daily_suggestion"
    __table_args__ = (UniqueConstraint("user_id", "suggestion_date", name="uq_daily_suggestion_user_date"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64))
    suggestion_date: Mapped[date] = mapped_column(sa.Date())
    outfit_ids: Mapped[list[str]] = mapped_column(IdList)
    reasoning: Mapped[str | None] = mapped_column(Text, nullable=True)
    weather_context: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    used_fallback: Mapped[bool] = mapped_column(Boolean, default=False)
    was_viewed: Mapped[bool] = mapped_column(Boolean, default=False)
    was_accepted: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class LearningDatum(Base):
    __tablename__ = "learning_datum"
    __table_args__ = (Index("ix_learning_datum_user_created", "user_id", "created_at"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64))
    interaction_type: Mapped[str] = mapped_column(String(32))
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    feedback_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    outfit_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    context: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    was_successful: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class UsageQuota(Base):
    __tablename__ = "usage_quota"
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    dimension: Mapped[str] = mapped_column(String(32), primary_key=True)
    window_date: Mapped[date] = mapped_column(sa.Date(), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, default=0)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class UserAccount(Base):
    __tablename__ = "user_account"
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class UserPreferences(Base):
    __tablename__ = "user_preferences"
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    favorite_colors: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    favorite_styles: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    personality_tags: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    quiz_derived: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    preferred_city: Mapped[str | None] = mapped_column(Text, nullable=True)
    preferred_country: Mapped[str | None] = mapped_column(Text, nullable=True)
    reminder_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class FashionTrend(Base):
    __tablename__ = "fashion_trend"
    __table_args__ = (UniqueConstraint("trend_name", "season", name="uq_fashion_trend_name_season"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    trend_name: Mapped[str] = mapped_column(Text)
    season: Mapped[str] = mapped_column(String(32))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    colors: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    key_pieces: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    style_tags: Mapped[list[str] | None] = mapped_column(TagList, nullable=True)
    popularity_score: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class SmartReminder(Base):
    __tablename__ = "smart_reminder"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    reminder_type: Mapped[str] = mapped_column(String(32))
    item_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), sa.ForeignKey("clothing_item.id", ondelete="CASCADE"), nullable=True)
    outfit_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), sa.ForeignKey("outfit.id", ondelete="CASCADE"), nullable=True)
    message: Mapped[str] = mapped_column(Text)
    priority: Mapped[int] = mapped_column(Integer, default=5)
    dismissed: Mapped[bool] = mapped_column(Boolean, default=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
