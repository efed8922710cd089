from app.schemas.common import CamelModel, PagedResponse, TimestampedRead
from app.schemas.question import (
    QuestionFilter,
    QuestionPage,
    QuestionRead,
    QuestionUpsert,
    parse_filter_id,
)
from app.schemas.hierarchy import *  # noqa: F401,F403
