from affinity_chain.scripts.solve_chain import main


if __name__ == '__main__':
    raise SystemExit(main())
