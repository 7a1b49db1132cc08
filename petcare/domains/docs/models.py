# petcare/domains/docs/models.py

from typing import Optional
from sqlmodel import Field, SQLModel

from petcare.core.config import settings


class Document(SQLModel, table=True):
    """
    Document 테이블 모델을 정의하는 클래스입니다.
    content 컬럼은 미디어 스트림($value)으로만 읽고 쓰며, doc_file_type이 해당 스트림의 Content-Type입니다.
    """
    __tablename__ = "Document"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    doc_id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "DocId"})
    doc_name: Optional[str] = Field(default=None, max_length=255, sa_column_kwargs={"name": "DocName"}, description="문서 이름")
    file_name: Optional[str] = Field(default=None, max_length=255, sa_column_kwargs={"name": "FileName"})
    file_type: Optional[str] = Field(default=None, max_length=50, sa_column_kwargs={"name": "FileType"})
    file_description: Optional[str] = Field(default=None, sa_column_kwargs={"name": "FileDescription"})
    content: Optional[bytes] = Field(default=None, sa_column_kwargs={"name": "Content"}, description="문서 바이너리")
    doc_file_type: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "DocFileType"}, description="미디어 Content-Type")
