from sqlalchemy import Column, String, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"
    
    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    # Создатель документа; права доступа хранятся в document_permissions
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    
    # Relationships
    creator = relationship("User", back_populates="documents")
    permissions = relationship("DocumentPermission", back_populates="document", cascade="all, delete-orphan")
