"""Book catalog constants."""

from django.db import models


class BookCategory(models.TextChoices):
    FICTION = "Fiction", "Fiction"
    NON_FICTION = "NonFiction", "Non-fiction"
    SCIENCE = "Science", "Science"
    TECHNOLOGY = "Technology", "Technology"
    BUSINESS = "Business", "Business"
    SELF_HELP = "SelfHelp", "Self-help"
    BIOGRAPHY = "Biography", "Biography"
    HISTORY = "History", "History"
    PHILOSOPHY = "Philosophy", "Philosophy"
    RELIGION = "Religion", "Religion"
    CHILDREN = "Children", "Children"
    YOUNG_ADULT = "YoungAdult", "Young adult"
    MYSTERY = "Mystery", "Mystery"
    THRILLER = "Thriller", "Thriller"
    ROMANCE = "Romance", "Romance"
    FANTASY = "Fantasy", "Fantasy"
    SCIENCE_FICTION = "ScienceFiction", "Science fiction"
    HORROR = "Horror", "Horror"
    POETRY = "Poetry", "Poetry"
    DRAMA = "Drama", "Drama"
    TRAVEL = "Travel", "Travel"
    COOKING = "Cooking", "Cooking"
    ART = "Art", "Art"
    MUSIC = "Music", "Music"
    SPORTS = "Sports", "Sports"
    EDUCATION = "Education", "Education"
    REFERENCE = "Reference", "Reference"
    OTHER = "Other", "Other"


class BookStatus(models.TextChoices):
    AVAILABLE = "Available", "Available"
    OUT_OF_STOCK = "OutOfStock", "Out of stock"
    DISCONTINUED = "Discontinued", "Discontinued"
    PRE_ORDER = "PreOrder", "Pre-order"


TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
ISBN_MAX_LENGTH = 13
PUBLISHER_MAX_LENGTH = 100
