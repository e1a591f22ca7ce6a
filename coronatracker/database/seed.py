"""
Default country statistics inserted into a freshly created database.
"""

from coronatracker.model.country import CountryRecord

DEFAULT_COUNTRIES = [
    CountryRecord(name="Canada", code="CA", confirmed=142866, deaths=9248),
    CountryRecord(name="China", code="CN", confirmed=90294, deaths=4736),
    CountryRecord(name="Denmark", code="DK", confirmed=21836, deaths=635),
    CountryRecord(name="Germany", code="DE", confirmed=269048, deaths=9376),
    CountryRecord(name="Finland", code="FI", confirmed=8799, deaths=339),
    CountryRecord(name="India", code="IN", confirmed=5118253, deaths=83198),
    CountryRecord(name="Japan", code="JP", confirmed=77488, deaths=1490),
    CountryRecord(name="Norway", code="NO", confirmed=12644, deaths=266),
    CountryRecord(name="Russia", code="RU", confirmed=1081152, deaths=18996),
    CountryRecord(name="Sweden", code="SE", confirmed=87885, deaths=5864),
    CountryRecord(name="USA", code="US", confirmed=6674411, deaths=197633),
]
