# schooladmin/services/school_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from .base_service import BaseService
from ..models.school import School, SchoolClass

class SchoolService(BaseService[School]):
    def __init__(self, db: AsyncSession):
        super().__init__(School, db)


class ClassService(BaseService[SchoolClass]):
    def __init__(self, db: AsyncSession):
        super().__init__(SchoolClass, db)
