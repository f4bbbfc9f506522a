import os

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///powerlog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join('static', 'uploads'))

    # shop floor
    SHOP_RATE = float(os.getenv('SHOP_RATE', '125'))
    SHOP_CAPACITY = int(os.getenv('SHOP_CAPACITY', '10'))
    BUSINESS_HOURS_START = int(os.getenv('BUSINESS_HOURS_START', '8'))
    BUSINESS_HOURS_END = int(os.getenv('BUSINESS_HOURS_END', '17'))

    # diagnostic assist
    GOOGLE_API_KEY = os.getenv('GOOGLE_API_KEY') or os.getenv('GEMINI_API_KEY')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-1.5-flash')
