import logging

from store import DATA_FILE, init_data_file

logging.basicConfig(level=logging.INFO)

init_data_file(DATA_FILE)

# creates the data directory and applications.json when missing
# SEED_SAMPLE_DATA=false writes an empty array instead of the sample applications
# an existing file is never touched
