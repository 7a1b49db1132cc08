# petcare/domains/docs/crud.py

from petcare.core.crud_base import CRUDBase
from . import models

# 미디어 스트림($value)은 OData 라우터가 content/doc_file_type 속성을 직접 갱신합니다.
document = CRUDBase(models.Document)
