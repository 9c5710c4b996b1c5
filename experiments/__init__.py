"""
Experiment scripts for the ridge trace framework.

1. exp_trace.py - Trace an image or a directory of images

Running Experiments:
-------------------
From the project root:

    python experiments/exp_trace.py --input data/raw --threshold 30
    python experiments/exp_trace.py --input scan.png --invert --operator alice
    python experiments/exp_trace.py --input data/raw --config configs/trace.yaml
"""
