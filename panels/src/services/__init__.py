"""Operations and host services used by the panels"""
