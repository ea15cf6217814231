from sqlalchemy import Column, String, BigInteger, Boolean, ForeignKey, Index, UniqueConstraint

from .base import Base, order_index_column


class Content(Base):
    __tablename__ = 'content'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    file_url = Column(String(64), nullable=False)
    author = Column(String(36), nullable=False)
    # RFC 4288 allows 127/127
    mime = Column(String(255), nullable=False)
    like_count = Column(BigInteger, nullable=False, default=0)
    dislike_count = Column(BigInteger, nullable=False, default=0)
    repub_count = Column(BigInteger, nullable=False, default=0)
    view_count = Column(BigInteger, nullable=False, default=0)
    comment_count = Column(BigInteger, nullable=False, default=0)
    created = Column(BigInteger, nullable=False)
    featured = Column(Boolean, default=False)
    featurable = Column(Boolean, default=False)
    removed = Column(Boolean, default=False)
    nsfw = Column(Boolean, default=False)

    __table_args__ = (
        Index('idx_content_author', 'author'),
    )


class Tag(Base):
    __tablename__ = 'tags'

    order_index = order_index_column()
    content_id = Column('id', String(36), ForeignKey('content.id', ondelete='CASCADE'), nullable=False)
    tag = Column(String(64), nullable=False)
    created = Column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint('id', 'tag', name='no_dupe_tags'),
    )
