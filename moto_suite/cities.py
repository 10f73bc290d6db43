# -*- coding: utf-8 -*-
"""
MotoSuite | City reference tables

Keyword table used to infer a dealer's city from its name and approximate
coordinates used to place dealers on the map.
"""

from __future__ import annotations
from typing import Dict, List, Tuple

# ==============================================================================
# CITY KEYWORDS (dealer name -> city)
# ==============================================================================

# Ordered: specific names must come before the broader ones they contain
# ("нижний тагил" before "нижний", "новочебоксарск" before "чебоксары").
CITY_KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    (("санкт-петербург", "спб", "питер"), "Санкт-Петербург"),
    (("нижний тагил",), "Нижний Тагил"),
    (("нижний новгород", "нижний", "тятюшкин"), "Нижний Новгород"),
    (("великий новгород",), "Великий Новгород"),
    (("ростов-на-дону", "ростов"), "Ростов-на-Дону"),
    (("москва", "авилон", "акцент", "major", "мкад"), "Москва"),
    (("новомосковск",), "Новомосковск"),
    (("тула",), "Тула"),
    (("набережные челны",), "Набережные Челны"),
    (("казань",), "Казань"),
    (("екатеринбург",), "Екатеринбург"),
    (("краснодар",), "Краснодар"),
    (("новосибирск",), "Новосибирск"),
    (("уфа",), "Уфа"),
    (("челябинск",), "Челябинск"),
    (("самара",), "Самара"),
    (("красноярск",), "Красноярск"),
    (("томск",), "Томск"),
    (("омск",), "Омск"),
    (("воронеж",), "Воронеж"),
    (("пермь",), "Пермь"),
    (("волгоград",), "Волгоград"),
    (("волжский",), "Волжский"),
    (("тюмень",), "Тюмень"),
    (("саратов",), "Саратов"),
    (("тольятти",), "Тольятти"),
    (("барнаул",), "Барнаул"),
    (("ижевск",), "Ижевск"),
    (("ульяновск",), "Ульяновск"),
    (("иркутск",), "Иркутск"),
    (("хабаровск",), "Хабаровск"),
    (("ярославль",), "Ярославль"),
    (("владивосток",), "Владивосток"),
    (("махачкала",), "Махачкала"),
    (("оренбург",), "Оренбург"),
    (("кемерово",), "Кемерово"),
    (("новокузнецк",), "Новокузнецк"),
    (("рязань",), "Рязань"),
    (("астрахань",), "Астрахань"),
    (("пенза",), "Пенза"),
    (("липецк",), "Липецк"),
    (("киров",), "Киров"),
    (("новочебоксарск",), "Новочебоксарск"),
    (("чебоксары",), "Чебоксары"),
    (("калининград",), "Калининград"),
    (("курск",), "Курск"),
    (("улан-удэ",), "Улан-Удэ"),
    (("ставрополь",), "Ставрополь"),
    (("сочи",), "Сочи"),
    (("тверь",), "Тверь"),
    (("магнитогорск",), "Магнитогорск"),
    (("иваново",), "Иваново"),
    (("брянск",), "Брянск"),
    (("белгород",), "Белгород"),
    (("сургут",), "Сургут"),
    (("владимир",), "Владимир"),
    (("чита",), "Чита"),
    (("архангельск",), "Архангельск"),
    (("калуга",), "Калуга"),
    (("якутск",), "Якутск"),
    (("грозный",), "Грозный"),
    (("смоленск",), "Смоленск"),
    (("саранск",), "Саранск"),
    (("череповец",), "Череповец"),
    (("курган",), "Курган"),
    (("вологда",), "Вологда"),
    (("орёл", "орел"), "Орёл"),
    (("владикавказ",), "Владикавказ"),
    (("мурманск",), "Мурманск"),
    (("тамбов",), "Тамбов"),
    (("петрозаводск",), "Петрозаводск"),
    (("кострома",), "Кострома"),
    (("новороссийск",), "Новороссийск"),
    (("химки",), "Химки"),
    (("балашиха",), "Балашиха"),
    (("люберцы",), "Люберцы"),
    (("одинцово",), "Одинцово"),
    (("псков",), "Псков"),
    (("симферополь",), "Симферополь"),
    (("севастополь",), "Севастополь"),
    (("пятигорск",), "Пятигорск"),
]


# ==============================================================================
# CITY COORDINATES (approximate city centers, lat/lng)
# ==============================================================================

CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "Москва": (55.7558, 37.6173),
    "Санкт-Петербург": (59.9343, 30.3351),
    "Новосибирск": (55.0084, 82.9357),
    "Екатеринбург": (56.8389, 60.6057),
    "Казань": (55.8304, 49.0661),
    "Нижний Новгород": (56.3269, 44.0059),
    "Челябинск": (55.1644, 61.4368),
    "Красноярск": (56.0153, 92.8932),
    "Самара": (53.2415, 50.2212),
    "Уфа": (54.7388, 55.9721),
    "Ростов-на-Дону": (47.2357, 39.7015),
    "Омск": (54.9885, 73.3242),
    "Краснодар": (45.0355, 38.9753),
    "Воронеж": (51.6683, 39.1919),
    "Пермь": (58.0105, 56.2294),
    "Волгоград": (48.7080, 44.5133),
    "Саратов": (51.5462, 46.0054),
    "Тюмень": (57.1613, 65.5250),
    "Тольятти": (53.5088, 49.4189),
    "Барнаул": (53.3548, 83.7698),
    "Ижевск": (56.8619, 53.2324),
    "Махачкала": (42.9831, 47.5046),
    "Хабаровск": (48.4814, 135.0721),
    "Ульяновск": (54.3141, 48.4031),
    "Иркутск": (52.2870, 104.2810),
    "Владивосток": (43.1198, 131.8869),
    "Ярославль": (57.6261, 39.8845),
    "Севастополь": (44.6166, 33.5254),
    "Ставрополь": (45.0428, 41.9734),
    "Томск": (56.5010, 84.9924),
    "Кемерово": (55.3547, 86.0875),
    "Набережные Челны": (55.7437, 52.3968),
    "Оренбург": (51.7666, 55.0993),
    "Новокузнецк": (53.7596, 87.1216),
    "Балашиха": (55.7982, 37.9680),
    "Рязань": (54.6095, 39.7126),
    "Чебоксары": (56.1184, 47.2445),
    "Пенза": (53.2273, 45.0000),
    "Липецк": (52.6012, 39.5711),
    "Калининград": (54.7104, 20.4522),
    "Астрахань": (46.3497, 48.0408),
    "Тула": (54.1931, 37.6171),
    "Киров": (58.6035, 49.6668),
    "Сочи": (43.6028, 39.7342),
    "Курск": (51.7080, 36.1732),
    "Улан-Удэ": (51.8348, 107.5845),
    "Тверь": (56.8596, 35.9118),
    "Магнитогорск": (53.4129, 59.0016),
    "Сургут": (61.2559, 73.3845),
    "Брянск": (53.2435, 34.3634),
    "Иваново": (57.0003, 40.9739),
    "Якутск": (62.0355, 129.6755),
    "Владимир": (56.1290, 40.4065),
    "Симферополь": (44.9572, 34.1108),
    "Белгород": (50.5997, 36.5983),
    "Нижний Тагил": (57.9194, 59.9650),
    "Калуга": (54.5293, 36.2754),
    "Чита": (52.0336, 113.5010),
    "Грозный": (43.3169, 45.6985),
    "Волжский": (48.7858, 44.7797),
    "Смоленск": (54.7903, 32.0504),
    "Саранск": (54.1808, 45.1867),
    "Череповец": (59.1223, 37.9045),
    "Курган": (55.4388, 65.3400),
    "Вологда": (59.2205, 39.8915),
    "Орёл": (52.9668, 36.0625),
    "Владикавказ": (43.0211, 44.6819),
    "Тамбов": (52.7236, 41.4423),
    "Мурманск": (68.9585, 33.0827),
    "Петрозаводск": (61.7849, 34.3469),
    "Кострома": (57.7679, 40.9269),
    "Новороссийск": (44.7154, 37.7619),
    "Химки": (55.8941, 37.4439),
    "Люберцы": (55.6796, 37.8890),
    "Одинцово": (55.6789, 37.2644),
    "Псков": (57.8136, 28.3496),
    "Великий Новгород": (58.5256, 31.2742),
    "Новомосковск": (54.0102, 38.2919),
    "Новочебоксарск": (56.1214, 47.4817),
    "Пятигорск": (44.0492, 43.0545),
    "Архангельск": (64.5399, 40.5152),
}
