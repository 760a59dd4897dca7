DEFAULT_EVENT_ID = "248d8ea0-b518-493d-b9c1-0a9f3e4e94c7"

DEFAULT_EVENT_TIMEZONE = "Pacific Standard Time"

# Substituted when the event API cannot supply the requested event
DEFAULT_EVENT = {
    "subject": "Let's go for lunch",
    "body": "Does noon work for you?",
    "start": "2021-03-30T10:00:00",
    "end": "2021-03-30T11:00:00",
    "time_zone": DEFAULT_EVENT_TIMEZONE,
}
