BASE_URL      = "https://sheets.googleapis.com/v4/spreadsheets"
USER_AGENT    = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/135.0.0.0 Safari/537.36"
)

# Sentinels left in an unedited configuration
API_KEY_PLACEHOLDER        = "YOUR_API_KEY_HERE"
SPREADSHEET_ID_PLACEHOLDER = "YOUR_SPREADSHEET_ID_HERE"
FORM_URL_PLACEHOLDER       = "YOUR_GOOGLE_FORM_URL_HERE"

DEFAULT_SHEET_NAME = "Form Responses 1"

RECENT_MATCHES_LIMIT = 10

FETCH_ERROR_MESSAGE = "Failed to fetch data. Check your API key and Spreadsheet ID."
NO_DATA_MESSAGE     = "No data found in sheet"

LEADERBOARD_COLUMNS = [
    "Rank", "Player", "Sets Won", "Sets Lost", "Win %",
    "Games Won", "Games Lost", "Game Win %",
]
