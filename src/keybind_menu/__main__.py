from .keybind_menu import main

if __name__ == '__main__':
    main()
