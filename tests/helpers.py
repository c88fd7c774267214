HEADER = (
    "ANTALKALD,MILJOE,ITSYSTEM,ORG,KANAL,TYPE,PERIODE,"
    "SERVICENAVN,SERVICEOPERATION,SERVICEVERSION,SUPPORTSYSTEM"
)


def call_row(
    calls="1",
    it_system="SysA",
    period="2025-11-30T10:00:00",
    service="CaseService",
    operation="get",
    version="v1",
    support="Support1",
) -> str:
    return f"{calls},PROD,{it_system},ORG,WEB,SYNC,{period},{service},{operation},{version},{support}"
