"""Country centroid table.

One representative coordinate per ISO 3166-1 alpha-2 code, used when the
platform supplies a country but no coordinates. Read-only.
"""

from __future__ import annotations

from types import MappingProxyType

COUNTRY_CENTROIDS = MappingProxyType({
    "US": (39.5, -98.35),
    "CA": (56.1, -106.3),
    "MX": (23.6, -102.5),
    "BR": (-14.2, -51.9),
    "AR": (-38.4, -63.6),
    "GB": (55, -3),
    "IE": (53.4, -8),
    "FR": (46.2, 2.2),
    "ES": (40.2, -3.7),
    "DE": (51.1, 10.4),
    "IT": (42.8, 12.5),
    "PT": (39.4, -8.2),
    "NL": (52.1, 5.3),
    "BE": (50.6, 4.6),
    "DK": (56.2, 9.5),
    "SE": (60.1, 18.6),
    "NO": (60.5, 8.5),
    "FI": (64.5, 26),
    "PL": (52.1, 19.1),
    "GR": (39.1, 22.9),
    "TR": (39, 35.2),
    "RU": (61.5, 105.3),
    "UA": (48.4, 31.2),
    "CN": (35.9, 104.2),
    "JP": (36.2, 138.3),
    "KR": (35.9, 127.8),
    "IN": (21, 78),
    "PK": (30.4, 69.3),
    "BD": (23.7, 90.4),
    "LK": (7.9, 80.8),
    "AU": (-25.3, 133.8),
    "NZ": (-41.3, 174.8),
    "ZA": (-30.6, 22.9),
    "KE": (-0.02, 37.9),
    "EG": (26.8, 30.8),
    "NG": (9.1, 8.7),
    "DZ": (28, 1.7),
    "MA": (31.8, -7.1),
    "TN": (34, 9),
    "SA": (23.9, 45.1),
    "AE": (23.4, 53.8),
    "IR": (32.4, 53.7),
    "IQ": (33, 44.1),
    "IL": (31, 35),
    "SY": (34.8, 39),
    "TH": (15.8, 101),
    "VN": (14.1, 108.3),
    "SG": (1.35, 103.8),
    "ID": (-0.8, 113.9),
    "PH": (12.9, 121.7),
    "MY": (4.2, 109.7),
    "KH": (12.6, 105),
    "MM": (21.9, 95.9),
    "TW": (23.7, 121),
    "HK": (22.3, 114.2),
    "CL": (-35.7, -71.5),
    "CO": (4.6, -74.1),
    "PE": (-9.2, -74.4),
    "VE": (6.4, -66.6),
    "EC": (-1.8, -78.2),
    "BO": (-16.3, -63.6),
    "PY": (-23.4, -58.4),
    "UY": (-32.5, -55.8),
    "CU": (21.5, -80),
    "CR": (9.8, -83.7),
    "GT": (15.8, -90.3),
    "DO": (18.9, -70.2),
    "JM": (18.1, -77.3),
    "TZ": (-6.3, 34.8),
    "UG": (1.3, 32.3),
    "GH": (7.9, -1),
    "ET": (9.1, 40.5),
    "SD": (12.9, 30.2),
    "SN": (14.5, -14.5),
    "CI": (7.5, -5.5),
    "CM": (7.4, 12.4),
    "AO": (-11.2, 17.9),
    "MZ": (-18.7, 35.5),
    "ZM": (-13.1, 27.8),
    "ZW": (-19, 29.2),
    "BW": (-22.3, 24.7),
    "NA": (-22.6, 17.5),
    "KZ": (48.2, 66.9),
    "MN": (46.8, 103),
    "NP": (28.4, 84.1),
    "AF": (33.8, 66),
    "AZ": (40.1, 47.6),
    "AM": (40.3, 45.1),
    "GE": (42.3, 43.4),
})
