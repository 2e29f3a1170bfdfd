from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

Base = declarative_base()

VALID_PHASES = ('focus', 'short_break', 'long_break')


class SessionTemplate(Base):
    __tablename__ = 'session_templates'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, index=True)
    name: Mapped[str] = mapped_column(String)
    focus_duration: Mapped[int] = mapped_column(Integer)
    break_duration: Mapped[int] = mapped_column(Integer)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime)
    updated_at: Mapped[datetime] = mapped_column(DateTime)

    # Schedule entries go away with their template; timer history does not
    scheduled_sessions: Mapped[list[ScheduledSession]] = relationship(
        'ScheduledSession', back_populates='template', cascade='all, delete-orphan'
    )
    timer_sessions: Mapped[list[TimerSession]] = relationship('TimerSession', back_populates='template')


class TimerSession(Base):
    __tablename__ = 'timer_sessions'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, index=True)
    template_id: Mapped[int | None] = mapped_column(Integer, ForeignKey('session_templates.id'))

    duration_minutes: Mapped[int] = mapped_column(Integer)
    phase: Mapped[str] = mapped_column(String)
    current_cycle: Mapped[int] = mapped_column(Integer, default=0)
    target_cycles: Mapped[int] = mapped_column(Integer, default=4)

    completed: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    paused: Mapped[bool] = mapped_column(Boolean, default=False)
    start_time: Mapped[datetime | None] = mapped_column(DateTime)
    end_time: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime)

    # Reflection / analysis
    notes: Mapped[str | None] = mapped_column(Text)
    sentiment_label: Mapped[str | None] = mapped_column(String)
    sentiment_score: Mapped[float | None] = mapped_column(Float)
    analyzed_at: Mapped[datetime | None] = mapped_column(DateTime)

    session_group_id: Mapped[str | None] = mapped_column(String, index=True)

    template: Mapped[SessionTemplate | None] = relationship('SessionTemplate', back_populates='timer_sessions')

    __table_args__ = (
        CheckConstraint(
            "phase IN ('focus', 'short_break', 'long_break')",
            name='ck_timer_sessions_phase'
        ),
        Index('ix_timer_sessions_user_completed', 'user_id', 'completed'),
    )


class ScheduledSession(Base):
    __tablename__ = 'scheduled_sessions'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, index=True)
    template_id: Mapped[int | None] = mapped_column(Integer, ForeignKey('session_templates.id'))
    title: Mapped[str | None] = mapped_column(String)
    start_datetime: Mapped[datetime] = mapped_column(DateTime, index=True)
    # NULL falls back to the template's focus duration when read
    duration_min: Mapped[int | None] = mapped_column(Integer)
    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime | None] = mapped_column(DateTime)

    template: Mapped[SessionTemplate | None] = relationship('SessionTemplate', back_populates='scheduled_sessions')
