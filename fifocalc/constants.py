"""Constants shared across the FIFO calculator."""

# CSV column names (header matching is case-insensitive)
COL_TRADE_ID = "tradeid"
COL_TYPE = "type"
COL_DATE = "date"
COL_CLIENT = "client"
COL_SECURITY = "security"
COL_AMOUNT = "amount"
COL_PRICE = "price"
COL_FEE = "fee"

REQUIRED_COLUMNS = [
    COL_TRADE_ID,
    COL_TYPE,
    COL_DATE,
    COL_SECURITY,
    COL_AMOUNT,
    COL_PRICE,
    COL_FEE,
]

DELIMITER = ";"
DATE_FORMAT = "%Y-%m-%d"
DATE_FORMAT_DISPLAY = "yyyy-MM-dd"

BUY = "BUY"
SELL = "SELL"
SIDES = (BUY, SELL)

STRUCTURE_FIELD = "CSV Structure"

# Reader errors
MSG_FILE_NOT_FOUND = "Trade data file not found: {0}"
MSG_FILE_EMPTY = "CSV file is empty"
MSG_INSUFFICIENT_ROWS = "CSV file must contain at least a header and one data row"
MSG_MISSING_REQUIRED_COLUMNS = "Missing required columns: {0}"
MSG_MISSING_COLUMN = "Missing required column: {0}"
MSG_COLUMN_MISMATCH = "Expected {0} columns but found {1}"
MSG_EMPTY_FIELD = "Required field is empty"
MSG_INVALID_FORMAT = "Invalid format for {0}: {1}"
MSG_PROCESS_FAILED = "Failed to process CSV file: {0}"
MSG_COMPLETED = "CSV processing completed successfully: {0} rows processed"
MSG_COMPLETED_WITH_ERRORS = (
    "CSV processing completed with errors: {0}/{1} rows processed successfully"
)

# Processor errors
MSG_NO_TRADES = "No trades found to process"
MSG_CLIENT_NOT_FOUND = "No trades found for client '{0}' up to {1}"
MSG_PROCESSING_FAILED = "Processing failed: {0}"

# Engine diagnostics
MSG_INSUFFICIENT_SHARES = (
    "Insufficient shares to sell {quantity} of {security} on {date}. "
    "Owned: {owned}. TradeId: {trade_id}"
)
