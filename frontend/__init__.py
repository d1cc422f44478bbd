"""
Frontend: страница на Flask и терминальный клиент к backend.
"""
