from teamdrive.databases.mongodb import mongodb
__all__ = ["mongodb"]
