"""Export stored chat sessions to a training-data JSON file.

Reads every chat session from MongoDB (newest first) and writes them as
role/content conversations with rating metadata to TRAINING_DATA_EXPORT_PATH
(default: training_data.json), overwriting any previous export.

Usage:
    python Scripts/export_training_data.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.services.export.training_data import main


if __name__ == "__main__":
    sys.exit(main())
