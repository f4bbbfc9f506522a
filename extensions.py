from flask_sqlalchemy import SQLAlchemy

# Инициализация расширений без привязки к конкретному приложению

# База данных: одна строка на коллекцию состояния (см. models.StateBlob)
db = SQLAlchemy()
