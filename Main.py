# Main.py
# HawkTimer Pro : contrôleur de minuteur de présentation
# Lance la fenêtre de contrôle ; la fenêtre de sortie s'ouvre depuis "Open output".

from hawktimer.app import main

if __name__ == "__main__":
    main()
