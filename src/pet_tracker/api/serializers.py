"""JSON serialization of domain models for API responses."""

from datetime import date, datetime

from pet_tracker.domain.analytics import AnalyticsReport, Dashboard
from pet_tracker.domain.feeding import FeedingEntry, WeightEntry
from pet_tracker.domain.foods import Food
from pet_tracker.domain.pets import Pet, format_age, pet_age
from pet_tracker.services.locale import format_number


def _iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value else None


def serialize_pet(pet: Pet, today: date) -> dict[str, object]:
    return {
        "id": str(pet.id),
        "name": pet.name,
        "species": pet.species.value,
        "breed": pet.breed,
        "birth_date": _iso(pet.birth_date),
        "age": format_age(pet_age(pet.birth_date, today)) if pet.birth_date else None,
        "target_weight": pet.target_weight,
        "created_at": _iso(pet.created_at),
        "updated_at": _iso(pet.updated_at),
    }


def serialize_food(food: Food) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "brand": food.brand,
        "display_name": food.display_name,
        "calories_per_gram": food.calories_per_gram,
        "protein_per_gram": food.protein_per_gram,
        "fat_per_gram": food.fat_per_gram,
        "carbs_per_gram": food.carbs_per_gram,
        "created_at": _iso(food.created_at),
        "updated_at": _iso(food.updated_at),
    }


def serialize_feeding(feeding: FeedingEntry, locale: str = "en") -> dict[str, object]:
    return {
        "id": str(feeding.id),
        "pet_id": str(feeding.pet_id),
        "food_id": str(feeding.food_id),
        "pet_name": feeding.pet.name if feeding.pet else None,
        "food_name": feeding.food.display_name if feeding.food else None,
        "amount_put_out": feeding.amount_put_out,
        "amount_not_eaten": feeding.amount_not_eaten,
        "amount_refilled": feeding.amount_refilled,
        "actual_consumed": feeding.actual_consumed,
        "calories_consumed": feeding.calories_consumed,
        "consumed_display": (
            f"{format_number(feeding.actual_consumed or 0.0, 1, locale)}g"
        ),
        "fed_at": _iso(feeding.fed_at),
        "notes": feeding.notes,
        "created_at": _iso(feeding.created_at),
        "updated_at": _iso(feeding.updated_at),
    }


def serialize_weight(entry: WeightEntry, locale: str = "en") -> dict[str, object]:
    return {
        "id": str(entry.id),
        "pet_id": str(entry.pet_id),
        "pet_name": entry.pet.name if entry.pet else None,
        "weight": entry.weight,
        "weight_display": f"{format_number(entry.weight, 1, locale)}kg",
        "weighed_at": _iso(entry.weighed_at),
        "notes": entry.notes,
        "created_at": _iso(entry.created_at),
        "updated_at": _iso(entry.updated_at),
    }


def serialize_dashboard(dashboard: Dashboard, locale: str = "en") -> dict[str, object]:
    stats = dashboard.stats
    return {
        "stats": {
            "total_pets": stats.total_pets,
            "today_feedings": stats.today_feedings,
            "today_calories": round(stats.today_calories),
            "recent_weight_trend": stats.recent_weight_trend,
        },
        "recent_feedings": [
            serialize_feeding(feeding, locale) for feeding in dashboard.recent_feedings
        ],
        "recent_weights": [
            serialize_weight(entry, locale) for entry in dashboard.recent_weights
        ],
    }


def serialize_report(report: AnalyticsReport) -> dict[str, object]:
    """Chart series with values rounded to whole units."""
    return {
        "start": report.start.isoformat(),
        "end": report.end.isoformat(),
        "daily_calories": [
            {"date": bucket.day.isoformat(), "calories": round(bucket.calories)}
            for bucket in report.daily_calories
        ],
        "food_distribution": [
            {"name": share.name, "amount": round(share.amount)}
            for share in report.food_distribution
        ],
        "weights": [
            {
                "pet_id": str(series.pet_id),
                "pet_name": series.pet_name,
                "points": [
                    {
                        "date": point.day.isoformat(),
                        "weighed_at": point.weighed_at.isoformat(),
                        "weight": point.weight,
                    }
                    for point in series.points
                ],
            }
            for series in report.weights
        ],
    }
