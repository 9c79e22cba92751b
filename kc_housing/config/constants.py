"""Constants for the King County housing analysis."""

# Downtown Seattle reference point (degrees)
DOWNTOWN_LAT = 47.6062
DOWNTOWN_LONG = -122.3321

# Sale date is stored as YYYYMMDDT000000
SALE_YEAR_SLICE = slice(0, 4)
SALE_MONTH_SLICE = slice(4, 6)

# Renovation grouping
NEVER_RENOVATED_YEAR = 0
RECENT_RENOVATION_YEAR = 2005  # Renovated in or after this year counts as recent

# Quality audit
SUSPICIOUS_BEDROOMS = (0, 33)
SUSPICIOUS_BATHROOMS = (0,)
AUDIT_COLUMNS = ["id", "bedrooms", "bathrooms", "sqft_living", "price", "zipcode"]

# Good quality label thresholds (strict)
GOOD_CONDITION_ABOVE = 3
GOOD_GRADE_ABOVE = 7

# Area sub-components that are linearly dependent on sqft_living
REDUNDANT_AREA_COLUMNS = ["sqft_above", "sqft_basement"]

# Columns every raw input must carry
REQUIRED_RAW_COLUMNS = [
    "id", "date", "price", "bedrooms", "bathrooms", "sqft_living",
    "waterfront", "view", "condition", "grade", "yr_built",
    "yr_renovated", "zipcode", "lat", "long"
]

# Split parameters
DEFAULT_TRAIN_FRACTION = 0.8
DEFAULT_SEED = 1

# Model parameters
OUTLIER_THRESHOLD = 2.0  # |standardized residual| above this is an outlier
DECISION_THRESHOLD = 0.5

# Reference data files shipped with the package
CORRECTIONS_FILE = "corrections.json"
ZIP_REGIONS_FILE = "zip_regions.json"

# File formats
SUPPORTED_INPUT_FORMATS = [".csv"]
SUPPORTED_OUTPUT_FORMATS = [".csv", ".parquet"]
