"""Constants for the DB Timetables API adapter.

API: DB Timetables v1 (IRIS). Station lookup and planned hourly timetables are
served as XML and require a bearer token.
"""

STATION_PATH = "/station/{query}"  # GET /station/<pattern>
PLAN_PATH = "/plan/{eva}/{date}/{hour}"  # GET /plan/<eva>/<YYMMDD>/<HH>

PLAN_DATE_FORMAT = "%y%m%d"
PLAN_HOUR_FORMAT = "%H"

DEFAULT_HEADERS = {
    "Accept": "application/xml",
}
