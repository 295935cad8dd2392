"""Data and account definitions for the Marinade initialize and configuration instructions."""