"""
Configuration file for the Cinema Recommendation System
Centralizes all paths, sentinels, parameters, and constants
"""

import os

# =============================================================================
# PATHS
# =============================================================================

# Project root directory
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Data directory
DATA_DIR = os.environ.get('CINEMA_DATA_DIR', os.path.join(PROJECT_ROOT, 'data'))

# Data file paths
MOVIES_ATTRIBUTES_FILE = os.path.join(DATA_DIR, 'movies_features.txt')
USER_RANKS_FILE = os.path.join(DATA_DIR, 'ranks_matrix.txt')

# =============================================================================
# INPUT FORMAT
# =============================================================================

# Marks a movie the user did not rate in the ratings file
NO_RATING = 'NA'

# =============================================================================
# QUERY RESULTS
# =============================================================================

# Returned by the string queries for an unknown user
USER_NOT_FOUND = 'USER NOT FOUND'

# Returned by predict_score for an unknown user or movie
NOT_FOUND = -1.0

# Returned by the string queries when no movie qualifies
NO_RECOMMENDATION = ''

# Similarity values lie in [-1, 1], so this is below any real candidate
INIT_SIMILARITY = -1.1

# =============================================================================
# MODEL PARAMETERS
# =============================================================================

# Collaborative Filtering parameters
CF_PARAMS = {
    'k': 3,                      # Number of most similar rated movies to weight
}

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
