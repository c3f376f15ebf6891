from sqlalchemy import Column, Text, ForeignKey, Index, Table
from sqlalchemy.orm import relationship
from .base import Base

class Group(Base):
    """
    Represents a named inventory group.

    Membership comes from administrators or from CIDR assignment and is
    never rebuilt by a zone import.
    """
    __tablename__ = 'groups'
    name = Column(Text, primary_key=True)
    hosts = relationship("Host", secondary="host_groups", back_populates="groups", passive_deletes=True)
    variables = relationship("GroupVar", back_populates="group", cascade="all, delete-orphan", passive_deletes=True)

class GroupVar(Base):
    """
    Key/value variable attached to a group.
    """
    __tablename__ = 'group_vars'
    group_name = Column('grp', Text, ForeignKey('groups.name', ondelete='CASCADE'), primary_key=True)
    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    group = relationship("Group", back_populates="variables")

host_groups = Table('host_groups', Base.metadata,
    Column('host', Text, ForeignKey('hosts.name', ondelete='CASCADE'), primary_key=True),
    Column('grp', Text, ForeignKey('groups.name', ondelete='CASCADE'), primary_key=True),
    Index('idx_host_groups_grp', 'grp'),
    Index('idx_host_groups_host', 'host'),
)
