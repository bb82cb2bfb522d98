from __future__ import annotations

from conftest import epoch_ms

import drawdash
from drawdash import parse_draws_csv, parse_traffic_csv

LOTTERY_CSV = '''"Draw Date","Winning Numbers","Multiplier"
"12/19/2020","07 11 19 27 53 10","2"
"09/26/2020","11 21 27 36 62 24",""
"2020-10-03","04 18 27 29 56 08","3"
'''

TRAFFIC_CSV = """Date,Socrata Users,Socrata Sessions,Socrata Pageviews,GeoHub Users,GeoHub Sessions,GeoHub Pageviews,Combined Users
03/07/2016,3507,4288,13341,412,533,1720,3919
01/02/2014,1287,1581,4902,,,,1287
06/11/2018,4630,5622,17512,2011,2490,7698,
"""


# ---------------------- draws ----------------------

def test_draws_are_parsed_and_sorted_by_date():
    draws = parse_draws_csv(LOTTERY_CSV)
    assert [d.date_label for d in draws] == ["Sep 26, 2020", "Oct 3, 2020", "Dec 19, 2020"]
    assert [d.date_ms for d in draws] == sorted(d.date_ms for d in draws)

    first = draws[0]
    assert first.date_ms == epoch_ms(2020, 9, 26)
    assert first.main_numbers == (11, 21, 27, 36, 62)
    assert first.powerball == 24
    assert first.multiplier is None
    assert first.main_sum == 157


def test_last_number_is_the_powerball_and_multiplier_is_parsed():
    latest = parse_draws_csv(LOTTERY_CSV)[-1]
    assert latest.main_numbers == (7, 11, 19, 27, 53)
    assert latest.powerball == 10
    assert latest.multiplier == 2


def test_malformed_draw_rows_are_dropped():
    text = '''"Draw Date","Winning Numbers","Multiplier"
"not a date","07 11 19 27 53 10","2"
"13/01/2020","07 11 19 27 53 10","2"
"12/32/2020","07 11 19 27 53 10","2"
"12/19/2020","","2"
"12/16/2020","08 18 21 37 54","2"
"12/12/2020","17 28 xx 58 59 11","4"
,"01 02 03 04 05 06",

"12/09/2020","12 16 22 32 68 19","2"
'''
    draws = parse_draws_csv(text)
    assert len(draws) == 1
    assert draws[0].main_numbers == (12, 16, 22, 32, 68)


def test_slash_dates_are_month_first_with_or_without_time():
    text = (
        '"Draw Date","Winning Numbers","Multiplier"\n'
        '"01/13/2020 12:00:00 AM","07 11 19 27 53 10","2"\n'
        '"2/3/2020","01 02 03 04 05 06","3"\n'
    )
    draws = parse_draws_csv(text)
    assert [d.date_label for d in draws] == ["Jan 13, 2020", "Feb 3, 2020"]
    assert draws[0].date_ms == epoch_ms(2020, 1, 13)


def test_day_first_slash_date_is_not_guessed():
    text = '"Draw Date","Winning Numbers","Multiplier"\n"13/01/2020","07 11 19 27 53 10","2"\n'
    assert parse_draws_csv(text) == ()


def test_quoted_date_with_comma_stays_one_field():
    text = '"Draw Date","Winning Numbers","Multiplier"\n"December 19, 2020","07 11 19 27 53 10","2"\n'
    (draw,) = parse_draws_csv(text)
    assert draw.date_label == "Dec 19, 2020"
    assert draw.powerball == 10
    assert draw.multiplier == 2


def test_multiplier_column_variants():
    text = (
        '"Draw Date","Winning Numbers"\n'
        '"12/19/2020","07 11 19 27 53 10"\n'
        '"12/16/2020","08 18 21 37 54 24","n/a"\n'
        '"12/12/2020","17 28 57 58 59 11","4x"\n'
    )
    draws = parse_draws_csv(text)
    assert [d.multiplier for d in draws] == [4, None, None]


def test_iso_timestamps_keep_their_calendar_date():
    text = '"Draw Date","Winning Numbers","Multiplier"\n"2020-09-26T00:00:00.000","11 21 27 36 62 24","3"\n'
    (draw,) = parse_draws_csv(text)
    assert draw.date_ms == epoch_ms(2020, 9, 26)


def test_duplicate_dates_are_preserved_in_source_order():
    text = (
        '"Draw Date","Winning Numbers","Multiplier"\n'
        '"12/19/2020","07 11 19 27 53 10","2"\n'
        '"12/19/2020","01 02 03 04 05 06","3"\n'
    )
    draws = parse_draws_csv(text)
    assert len(draws) == 2
    assert [d.powerball for d in draws] == [10, 6]


def test_header_only_or_blank_text_yields_no_draws():
    assert parse_draws_csv("") == ()
    assert parse_draws_csv('"Draw Date","Winning Numbers","Multiplier"\n') == ()


def test_bundled_draw_sample_parses_completely(data_dir):
    text = (data_dir / "powerball.csv").read_text(encoding="utf-8")
    draws = parse_draws_csv(text)
    assert len(draws) == 30
    assert draws[0].date_label == "Sep 26, 2020"
    assert draws[-1].date_label == "Jan 6, 2021"


# ---------------------- traffic ----------------------

def test_traffic_rows_are_parsed_and_sorted():
    days = parse_traffic_csv(TRAFFIC_CSV)
    assert [d.date_label for d in days] == ["Jan 2, 2014", "Mar 7, 2016", "Jun 11, 2018"]

    first = days[0]
    assert first.date_ms == epoch_ms(2014, 1, 2)
    assert first.socrata_users == 1287
    assert first.geohub_users is None
    assert first.combined_users == 1287


def test_missing_combined_users_is_synthesized_from_sources():
    last = parse_traffic_csv(TRAFFIC_CSV)[-1]
    assert last.socrata_users == 4630
    assert last.geohub_users == 2011
    assert last.combined_users == 6641


def test_short_rows_treat_missing_source_as_zero():
    text = "Date,Socrata Users\n01/07/2016,100\n01/08/2016,,,,25\n"
    days = parse_traffic_csv(text)
    assert [(d.socrata_users, d.geohub_users, d.combined_users) for d in days] == [
        (100, None, 100),
        (None, 25, 25),
    ]


def test_rows_without_any_user_count_or_valid_date_are_dropped():
    text = "\n".join([
        "Date,Socrata Users,a,b,GeoHub Users,c,d,Combined Users",
        "01/05/2016,,,,,,,",
        "01/06/2016,n/a,,,x,,,-",
        "13/45/2016,10,,,10,,,20",
        "02/30/2016,10,,,10,,,20",
        "2016-01-05,10,,,10,,,20",
        ",10,,,10,,,20",
        "01/09/2016,10,,,10,,,20",
    ])
    days = parse_traffic_csv(text)
    assert len(days) == 1
    assert days[0].date_label == "Jan 9, 2016"
    assert days[0].combined_users == 20


def test_two_digit_traffic_years_are_twentieth_century():
    text = "Date,S,a,b,G,c,d,C\n01/02/2016,7,,,,,,7\n01/02/14,5,,,,,,5\n"
    days = parse_traffic_csv(text)
    assert [(d.date_label, d.combined_users) for d in days] == [("Jan 2, 1914", 5), ("Jan 2, 2016", 7)]
    assert days[0].date_ms == epoch_ms(1914, 1, 2)


def test_fractional_counts_stay_fractional():
    text = "Date,S,a,b,G,c,d,C\n01/02/2016,10.5,,,2,,,\n"
    (day,) = parse_traffic_csv(text)
    assert day.socrata_users == 10.5
    assert isinstance(day.geohub_users, int)
    assert day.combined_users == 12.5


def test_traffic_handles_crlf_and_blank_lines():
    text = "Date,S,a,b,G,c,d,C\r\n\r\n01/02/2014, 12 ,,,,,, 12 \r\n"
    (day,) = parse_traffic_csv(text)
    assert day.combined_users == 12


def test_bundled_traffic_sample_is_sorted(data_dir):
    text = (data_dir / "Open_Data_Website_Traffic.csv").read_text(encoding="utf-8")
    days = parse_traffic_csv(text)
    assert len(days) == 22
    assert all(a.date_ms <= b.date_ms for a, b in zip(days, days[1:]))
    assert all(d.combined_users is not None for d in days)


def test_parsing_is_deterministic():
    assert parse_traffic_csv(TRAFFIC_CSV) == parse_traffic_csv(TRAFFIC_CSV)
    assert drawdash.parse_draws_csv(LOTTERY_CSV) == drawdash.parse_draws_csv(LOTTERY_CSV)
