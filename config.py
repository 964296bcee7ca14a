"""
Configuration for the airdrop data scripts.
Values are read from the environment, with a .env file loaded first if present.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Input: CSV export converted to JSON, [{"address": ..., "value": "100.0"}, ...]
airdrop_input_path = os.getenv("AIRDROP_INPUT_PATH", "data/raw/csvjson.json")

# Output: [{"address": ..., "value": "100000000000000000000"}, ...]
airdrop_output_path = os.getenv("AIRDROP_OUTPUT_PATH", "data/airdropData.json")

airdrop_proofs_path = os.getenv("AIRDROP_PROOFS_PATH", "proofs/airdropMerkleProofs.json")

token_decimals = int(os.getenv("TOKEN_DECIMALS", "18"))
token_symbol = os.getenv("TOKEN_SYMBOL", "ARCD")
