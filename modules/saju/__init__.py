"""
Модуль сажу-прогнозов
"""
from .models import BirthRecord, BirthTimeSlot, ChartResult, FortuneReport, Gender, SubmissionResult
from .fortune_adapter import FortuneAdapter
from .chart_adapter import ChartAdapter
from .fallback import fallback_report
from .generation_service import GenerationService
from .pending_save import PendingSaveStore
from .repository import SajuResultRepository
from .service import SajuService

__all__ = [
    'BirthRecord',
    'BirthTimeSlot',
    'ChartResult',
    'FortuneReport',
    'Gender',
    'SubmissionResult',
    'FortuneAdapter',
    'ChartAdapter',
    'fallback_report',
    'GenerationService',
    'PendingSaveStore',
    'SajuResultRepository',
    'SajuService',
]
