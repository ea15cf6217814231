from sqlalchemy import Column, String, BigInteger

from .base import Base, order_index_column


class Credential(Base):
    __tablename__ = 'auth'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    hash = Column(String(128), nullable=False)


class Secret(Base):
    __tablename__ = 'secret'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    # SHA-256 of the raw secret; plaintext is never stored
    secret = Column(String(64), nullable=False, unique=True)


class Token(Base):
    __tablename__ = 'token'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    # SHA-256 of the raw token, unique so a bearer value maps to one owner
    token = Column(String(64), nullable=False, unique=True)
    created = Column(BigInteger, nullable=False)
