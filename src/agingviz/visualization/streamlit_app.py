"""Entry script handed to ``streamlit run`` by the dashboard launcher."""

from agingviz.visualization.app import main

main()
