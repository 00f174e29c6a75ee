"""
Тесты детерминированного запасного прогноза
"""
import pytest

from modules.saju import BirthRecord, fallback_report
from modules.saju.data import FALLBACK_OVERALL_TEXTS, FALLBACK_WEALTH_TEXTS, SERVER_FALLBACK_REPORT
from modules.saju.fallback import fallback_bucket, server_fallback_report


def _record(year, month, day, gender="남자", **extra):
    return BirthRecord(name="a", gender=gender, birthYear=year, birthMonth=month, birthDay=day, **extra)


class TestFallbackBucket:

    def test_known_bucket(self, birth_record):
        # 1990 + 5 + 15 + 1 = 2011
        assert fallback_bucket(birth_record) == 1

    def test_gender_shifts_bucket(self):
        assert fallback_bucket(_record(1990, 5, 15, gender="여자")) == 0

    @pytest.mark.parametrize("day, expected", [(1, 3), (2, 4), (3, 0), (4, 1), (5, 2)])
    def test_all_buckets_reachable(self, day, expected):
        # 2000 + 1 + day + 1
        assert fallback_bucket(_record(2000, 1, day)) == expected


class TestFallbackReport:

    def test_texts_follow_bucket(self, birth_record):
        report = fallback_report(birth_record)
        assert report.overall == FALLBACK_OVERALL_TEXTS[1]
        assert report.wealth.fortune == FALLBACK_WEALTH_TEXTS[1]

    def test_every_bucket_complete(self):
        for day in range(1, 6):
            report = fallback_report(_record(2000, 1, day))
            wire = report.to_wire()
            assert set(wire) == {"평생사주_총평", "재물운", "시기별", "건강운", "애정운"}
            for section in ("재물운", "시기별", "건강운", "애정운"):
                assert all(value for value in wire[section].values())

    def test_name_and_time_do_not_matter(self):
        base = fallback_report(_record(1990, 5, 15))
        other = fallback_report(BirthRecord(
            name="완전히 다른 이름", gender="남자", birthYear=1990, birthMonth=5, birthDay=15,
            birthTime="자시(23-01시)", lunarCalendar=True,
        ))
        assert base == other

    def test_repeatable(self, birth_record):
        assert fallback_report(birth_record) == fallback_report(birth_record)

    def test_common_sections_shared(self):
        first = fallback_report(_record(2000, 1, 1))
        second = fallback_report(_record(2000, 1, 2))
        assert first.overall != second.overall
        assert first.life_stages == second.life_stages
        assert first.love == second.love


class TestServerFallback:

    def test_matches_table(self):
        assert server_fallback_report().to_wire() == SERVER_FALLBACK_REPORT
