# -*- coding: utf-8 -*-
"""
MotoSuite | Bundled sample

Small sales document shown when no upload, local file or URL is available.
"""

SAMPLE_SALES = {
    "total": {
        "count_sold": 19,
        "total_sold_price": 10209500,
        "total_buy_price": 9617000,
    },
    "items": {
        "3": {
            "name": "Тятюшкин Александр Сергеевич ИП",
            "models": {
                "12": {
                    "name": "VOGE Rally 300",
                    "offers": {
                        "79": {
                            "name": "Classic | Black",
                            "count_sold": 1,
                            "total_sold_price": 375000,
                            "total_buy_price": 328000,
                            "vehicles": {
                                "86": {"vin": "LLCLGN1G3PA102942", "sale_date": "05.02.2024"},
                            },
                        },
                        "256": {
                            "name": "Classic | Yellow",
                            "count_sold": 3,
                            "total_sold_price": 1191000,
                            "total_buy_price": 1113000,
                            "vehicles": {
                                "8404": {"vin": "LLCLGN1G2SA100351", "sale_date": "26.06.2025"},
                                "8740": {"vin": "LLCLGN1G7SA100152", "sale_date": "27.06.2025"},
                                "8759": {"vin": "LLCLGN1G5SA100151", "sale_date": "24.05.2025"},
                            },
                        },
                    },
                },
                "23": {
                    "name": "VOGE AC350",
                    "offers": {
                        "124": {
                            "name": "Classic | Yellow",
                            "count_sold": 2,
                            "total_sold_price": 646000,
                            "total_buy_price": 808000,
                            "vehicles": {
                                "320": {"vin": "LLCVPP106PA150782", "sale_date": "02.05.2024"},
                                "323": {"vin": "LLCVPP103PA150786", "sale_date": "14.06.2024"},
                            },
                        },
                    },
                },
            },
        },
        "5": {
            "name": "МОТОПАРК ООО (Тула)",
            "models": {
                "20": {
                    "name": "VOGE DS525X",
                    "offers": {
                        "166": {
                            "name": "Adventure | Grey",
                            "count_sold": 3,
                            "total_sold_price": 2370000,
                            "total_buy_price": 2025000,
                            "vehicles": {
                                "3142": {"vin": "LLCVPR1T2RA102933", "sale_date": "20.04.2024"},
                                "3154": {"vin": "LLCVPR1T5RA102960", "sale_date": "14.04.2024"},
                                "8063": {"vin": "LLCVPR1T5RA105955", "sale_date": "31.12.2024"},
                            },
                        },
                    },
                },
                "41": {
                    "name": "Loncin LX250GY-3",
                    "offers": {
                        "410": {
                            "name": "Enduro | Red",
                            "count_sold": 2,
                            "total_sold_price": 498000,
                            "total_buy_price": 420000,
                            "vehicles": {
                                "9101": {"vin": "LLCJPL203RA000114", "sale_date": "11.07.2025"},
                                "9102": {"vin": "LLCJPL203RA000117", "sale_date": "19.07.2025"},
                            },
                        },
                    },
                },
            },
        },
        "46": {
            "name": "АВИЛОН АГ АО (Москва)",
            "models": {
                "18": {
                    "name": "Скутер VOGE SR4 Max",
                    "offers": {
                        "159": {
                            "name": "Classic | Black",
                            "count_sold": 4,
                            "total_sold_price": 2370000,
                            "total_buy_price": 2261000,
                            "vehicles": {
                                "3406": {"vin": "LLCVTP5AXRS000251", "sale_date": "23.03.2024"},
                                "3418": {"vin": "LLCVTP5A2RS000258", "sale_date": "12.05.2024"},
                                "4847": {"vin": "LLCVTP5A1RS001837", "sale_date": "16.09.2024"},
                                "4884": {"vin": "LLCVTP5A2RS001815", "sale_date": "24.08.2024"},
                            },
                        },
                    },
                },
                "30": {
                    "name": "VOGE DS900X",
                    "offers": {
                        "300": {
                            "name": "Adventure | Black",
                            "count_sold": 2,
                            "total_sold_price": 2259500,
                            "total_buy_price": 2242000,
                            "vehicles": {
                                "8029": {"vin": "LLCVPX1A9SA157016", "sale_date": "28.01.2025"},
                                "10587": {"vin": "LLCVPX1A8SA160098", "sale_date": "28.08.2025"},
                            },
                        },
                    },
                },
            },
        },
        "71": {
            "name": "Мото Драйв ООО",
            "city": "Екатеринбург",
            "models": {
                "41": {
                    "name": "Loncin LX250GY-3",
                    "offers": {
                        "411": {
                            "name": "Enduro | Black",
                            "count_sold": 2,
                            "total_sold_price": 500000,
                            "total_buy_price": 420000,
                            "vehicles": {
                                "9203": {"vin": "LLCJPL205RA000301", "sale_date": "03.04.2025"},
                                "9204": {"vin": "LLCJPL205RA000302", "sale_date": "17.05.2025"},
                            },
                        },
                    },
                },
            },
        },
    },
}
