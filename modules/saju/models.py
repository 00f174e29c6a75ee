"""
Модели данных для сажу-прогноза и карты манседёк
"""
import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Gender(str, Enum):
    """Пол в форме ввода"""
    MALE = "남자"
    FEMALE = "여자"


class BirthTimeSlot(str, Enum):
    """Двухчасовой промежуток рождения (12 земных ветвей) или «не выбрано»"""
    JA = "자시(23-01시)"
    CHUK = "축시(01-03시)"
    IN = "인시(03-05시)"
    MYO = "묘시(05-07시)"
    JIN = "진시(07-09시)"
    SA = "사시(09-11시)"
    O = "오시(11-13시)"
    MI = "미시(13-15시)"
    SIN = "신시(15-17시)"
    YU = "유시(17-19시)"
    SUL = "술시(19-21시)"
    HAE = "해시(21-23시)"
    UNSELECTED = "선택"


class BirthRecord(BaseModel):
    """
    Данные рождения из формы.

    Неизменяемы после создания. Имена полей в JSON совпадают с формой
    (birthYear, birthMonth, ...).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Имя")
    gender: Gender = Field(..., description="Пол")
    birth_year: int = Field(..., alias="birthYear", ge=1, le=9999, description="Год рождения")
    birth_month: int = Field(..., alias="birthMonth", ge=1, le=12, description="Месяц рождения")
    birth_day: int = Field(..., alias="birthDay", ge=1, le=31, description="День рождения")
    birth_time: BirthTimeSlot = Field(BirthTimeSlot.UNSELECTED, alias="birthTime", description="Время рождения")
    lunar_calendar: bool = Field(False, alias="lunarCalendar", description="Дата по лунному календарю")

    @model_validator(mode="after")
    def _check_date(self) -> "BirthRecord":
        if self.lunar_calendar:
            # в лунном месяце не больше 30 дней
            if self.birth_day > 30:
                raise ValueError(f"Некорректный лунный день: {self.birth_day}")
        else:
            try:
                datetime.date(self.birth_year, self.birth_month, self.birth_day)
            except ValueError as e:
                raise ValueError(f"Некорректная дата рождения: {e}") from e
        return self

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class WealthFortune(_Section):
    """Блок «재물운»"""
    fortune: str = Field(..., alias="재물운", min_length=1)
    how_to_save: str = Field(..., alias="재물_모으는_법", min_length=1)
    loss_prevention: str = Field(..., alias="재물_손실_막는법", min_length=1)
    investment_tips: str = Field(..., alias="재테크_비법", min_length=1)
    career: str = Field(..., alias="커리어", min_length=1)


class LifeStageFortune(_Section):
    """Блок «시기별»"""
    early_years: str = Field(..., alias="초년운", min_length=1)
    middle_years: str = Field(..., alias="중년운", min_length=1)
    late_years: str = Field(..., alias="말년운", min_length=1)
    this_year_expect: str = Field(..., alias="올해_기대할_점", min_length=1)
    this_year_caution: str = Field(..., alias="올해_주의할_점", min_length=1)
    this_year_action: str = Field(..., alias="올해_추천_행동", min_length=1)


class HealthFortune(_Section):
    """Блок «건강운»"""
    health: str = Field(..., alias="건강운", min_length=1)
    constitution: str = Field(..., alias="체질운", min_length=1)


class LoveFortune(_Section):
    """Блок «애정운»"""
    love: str = Field(..., alias="애정운", min_length=1)
    attraction: str = Field(..., alias="이성운", min_length=1)


class FortuneReport(_Section):
    """Полный отчет прогноза. Все поля обязательны и непусты."""
    overall: str = Field(..., alias="평생사주_총평", min_length=1)
    wealth: WealthFortune = Field(..., alias="재물운")
    life_stages: LifeStageFortune = Field(..., alias="시기별")
    health: HealthFortune = Field(..., alias="건강운")
    love: LoveFortune = Field(..., alias="애정운")

    def to_wire(self) -> Dict[str, Any]:
        """Словарь с корейскими ключами, как в JSON ответа"""
        return self.model_dump(by_alias=True)


class ReportSource(str, Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"


class ManseryeokInput(BaseModel):
    """Тело запроса к API карты манседёк"""
    name: str
    gender: str  # 'M' | 'F'
    calendar: str  # 'S' - солнечный, 'L' - лунный
    birthday: str  # YYYY/MM/DD
    birthtime: str  # HH:MM
    hmUnsure: bool = False
    midnightAdjust: bool = False
    locationId: int
    locationName: str
    year: int
    month: int
    day: int
    hour: int
    min: int


class _ChartModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ChartSymbol(_ChartModel):
    """Элемент справочника (инь-ян, стихия, десять богов и т.п.)"""
    id: int
    name: str
    chinese: str


class ChartStem(ChartSymbol):
    """Небесный ствол / земная ветвь со связанными признаками"""
    yin_yang: ChartSymbol = Field(..., alias="_음양")
    element: ChartSymbol = Field(..., alias="_오행")
    ten_gods: ChartSymbol = Field(..., alias="_십성")


class ChartPillar(_ChartModel):
    """Столп карты"""
    stem: ChartStem = Field(..., alias="_천간")
    branch: ChartStem = Field(..., alias="_지지")
    hidden_stems: List[ChartSymbol] = Field(default_factory=list, alias="_지장간")
    twelve_stage: ChartSymbol = Field(..., alias="_운성")


class ChartPillars(_ChartModel):
    year: ChartPillar = Field(..., alias="_세차")
    month: ChartPillar = Field(..., alias="_월건")
    day: ChartPillar = Field(..., alias="_일진")
    hour: ChartPillar = Field(..., alias="_시진")


class ChartSpirits(_ChartModel):
    year: Optional[ChartSymbol] = Field(None, alias="_세차")
    month: Optional[ChartSymbol] = Field(None, alias="_월건")
    day: Optional[ChartSymbol] = Field(None, alias="_일진")
    hour: Optional[ChartSymbol] = Field(None, alias="_시진")


class ChartProfile(_ChartModel):
    index: Optional[int] = None
    avatar: Optional[str] = None
    sexagenaryCycle: str
    sunBirth: str
    lunBirth: str
    adjustedBirth: Optional[str] = None
    location: str
    adjusted: Optional[str] = None


class ChartResult(_ChartModel):
    """Карта манседёк в том виде, в котором ее отдает внешний API"""
    bitmap: Optional[int] = None
    pillars: ChartPillars = Field(..., alias="_기본명식")
    spirits: Optional[ChartSpirits] = Field(None, alias="_신살")
    profile: ChartProfile


class ChartResponse(_ChartModel):
    status: int
    data: ChartResult


class SubmissionResult(BaseModel):
    """Результат отправки формы"""
    record_id: Optional[str] = None
    source: ReportSource
    report: FortuneReport

    def to_wire(self) -> Dict[str, Any]:
        return {
            "record_id": self.record_id,
            "source": self.source.value,
            "report": self.report.to_wire(),
        }


class ShareData(BaseModel):
    """Данные публичной ссылки"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    gender: Gender
    birth_year: int = Field(..., alias="birthYear")
    birth_month: int = Field(..., alias="birthMonth")
    birth_day: int = Field(..., alias="birthDay")
    birth_time: BirthTimeSlot = Field(..., alias="birthTime")
    lunar_calendar: bool = Field(..., alias="lunarCalendar")
    overall: str = Field(..., alias="평생사주_총평")


class ShareRequest(BaseModel):
    """Запрос на создание ссылки"""
    input: BirthRecord
    result: FortuneReport


class SaveRequest(BaseModel):
    """Запрос на сохранение результата в аккаунт"""
    model_config = ConfigDict(populate_by_name=True)

    input: BirthRecord
    result: FortuneReport
    record_id: Optional[str] = Field(None, alias="recordId")


class PendingSaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    record_id: str = Field(..., alias="recordId", min_length=1)


class PendingSaveIntent(BaseModel):
    """Намерение сохранить результат после входа через редирект"""
    record_id: str = Field(..., alias="recordId")
    issued_at: float = Field(..., alias="issuedAt")

    model_config = ConfigDict(populate_by_name=True)
