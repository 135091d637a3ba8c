"""SQLAlchemy ORM models for the WellTrack API.

Every record is owned by exactly one user through its ``user_id`` column;
there are no cross-user relations. Nested AI output (meals, weekly plans,
report sections) is kept in JSON columns as one document per row.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, Text, JSON, Index
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class UserProfile(Base):
    """Display preferences and onboarding state for a user."""

    __tablename__ = "user_profiles"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)
    display_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    initial_health_data_submitted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class UserSession(Base):
    """Session cookie token issued by the auth provider."""

    __tablename__ = "user_sessions"
    id = Column(Integer, primary_key=True, index=True)
    token = Column(String, nullable=False, unique=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False)


class HealthMetrics(Base):
    """One snapshot of a user's vitals.

    Snapshots are append-only; the latest one is found by ``recorded_at``.
    """

    __tablename__ = "health_metrics"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    height = Column(Float, nullable=False)
    weight = Column(Float, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    activity_level = Column(String, nullable=False)
    date_of_birth = Column(DateTime, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)
    emergency_phone = Column(String, nullable=True)
    smoking_status = Column(String, nullable=True)
    diet_type = Column(String, nullable=True)
    blood_type = Column(String, nullable=True)
    blood_pressure = Column(String, nullable=True)
    heart_rate = Column(Float, nullable=True)
    respiratory_rate = Column(Float, nullable=True)
    temperature = Column(Float, nullable=True)
    sleep_duration = Column(Float, nullable=True)
    stress_level = Column(Float, nullable=True)
    chronic_conditions = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    medications = Column(Text, nullable=True)
    family_history = Column(Text, nullable=True)
    surgeries = Column(Text, nullable=True)
    fitness_goals = Column(Text, nullable=True)
    recorded_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (Index("ix_health_metrics_user_recorded", "user_id", "recorded_at"),)


class FoodEntry(Base):
    """One logged meal."""

    __tablename__ = "food_entries"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    food_name = Column(String, nullable=False)
    calories = Column(Float, nullable=False)
    protein_g = Column(Float, nullable=False)
    carbs_g = Column(Float, nullable=False)
    fats_g = Column(Float, nullable=False)
    protein_percent = Column(Float, default=0)
    carbs_percent = Column(Float, default=0)
    fats_percent = Column(Float, default=0)
    image_url = Column(Text, nullable=True)
    ai_analysis_result = Column(Text, nullable=True)
    recorded_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (Index("ix_food_entries_user_recorded", "user_id", "recorded_at"),)


class Exercise(Base):
    """One logged workout."""

    __tablename__ = "exercises"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, default="other")
    sets = Column(Integer, nullable=False)
    reps = Column(Integer, nullable=False)
    calories_burned = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class SleepRecord(Base):
    """One night of sleep: duration in hours, quality on a 1-5 scale."""

    __tablename__ = "sleep_records"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    duration = Column(Float, nullable=False)
    quality = Column(Integer, nullable=False)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class DietPlan(Base):
    """Single-day plan, or a 7-day plan when ``is_weekly_plan`` is set.

    Weekly plans point back at the single-day plan they were derived from
    via ``base_on_plan_id``.
    """

    __tablename__ = "diet_plans"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    daily_calories = Column(Float, nullable=False)
    goal_weight = Column(Float, nullable=True)
    timeframe = Column(String, nullable=True)
    diet_type = Column(String, nullable=True)
    meal_count = Column(Integer, nullable=True)
    include_snacks = Column(Boolean, default=False)
    meals = Column(JSON, nullable=True)
    is_weekly_plan = Column(Boolean, nullable=False, default=False)
    base_on_plan_id = Column(Integer, nullable=True, index=True)
    weekly_plan_data = Column(JSON, nullable=True)
    week_start_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class HealthGoal(Base):
    """A user-defined target with progress tracking."""

    __tablename__ = "health_goals"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_date = Column(DateTime, nullable=True)
    category = Column(String, nullable=False)
    target_value = Column(Float, nullable=True)
    current_value = Column(Float, nullable=True)
    unit = Column(String, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    progress = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class HealthReport(Base):
    """A generated report: computed scores plus AI-written sections."""

    __tablename__ = "health_reports"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    summary = Column(Text, nullable=False)
    health_score = Column(Integer, nullable=False)
    bmi = Column(Float, nullable=True)
    activity_level = Column(String, nullable=True)
    risk_level = Column(String, nullable=True)
    health_metrics = Column(JSON, nullable=True)
    vital_signs = Column(JSON, nullable=True)
    activity_data = Column(JSON, nullable=True)
    nutrition_data = Column(JSON, nullable=True)
    nutrition_trends = Column(JSON, nullable=True)
    nutrition_advice = Column(JSON, nullable=True)
    predictions = Column(JSON, nullable=True)
    ai_generated = Column(JSON, nullable=True)
    generated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (Index("ix_health_reports_user_generated", "user_id", "generated_at"),)
