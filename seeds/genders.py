from models.gender import Gender
from utils.logger import get_logger

logger = get_logger(__name__)

BASE_GENDERS = ["Male", "Female", "Other"]


def seed_genders():
    Gender.collection().delete_many({})
    for name in BASE_GENDERS:
        Gender(name=name).save()
    logger.info("Seeded %d genders", len(BASE_GENDERS))
