import os

# keep test runs from writing logs/*.log into the checkout
os.environ.setdefault("BIGOPROF_LOG_TO_FILE", "false")
