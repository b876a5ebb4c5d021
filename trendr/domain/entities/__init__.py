from trendr.domain.entities.collection_run import CollectionResult, CollectionRunState
from trendr.domain.entities.content import Content, ContentTopic
from trendr.domain.entities.creator import Creator
from trendr.domain.entities.raw_item import RawAuthor, RawItem
from trendr.domain.entities.topic import ExtractedTopic, Topic, TopicCooccurrence

__all__ = [
    "CollectionResult",
    "CollectionRunState",
    "Content",
    "ContentTopic",
    "Creator",
    "ExtractedTopic",
    "RawAuthor",
    "RawItem",
    "Topic",
    "TopicCooccurrence",
]
