import pandas as pd
import matplotlib.pyplot as plt
import os


class EvolutionVisualizer:
    def __init__(self, csv_directory):
        """
        Initialize the visualizer with the directory containing the fitness history CSV files.
        """
        self.csv_directory = csv_directory
        self.data = self._load_all_csv()

    def _load_all_csv(self):
        """
        Load every *_history.csv file from the specified directory.
        Each DataFrame corresponds to one run, one row per generation.
        """
        data = {}
        csv_files = sorted([f for f in os.listdir(self.csv_directory) if f.endswith('_history.csv')])
        for file in csv_files:
            file_path = os.path.join(self.csv_directory, file)
            data[file[:-len('_history.csv')]] = pd.read_csv(file_path)
        return data

    def _finish(self, save_path):
        if save_path:
            plt.savefig(save_path)
            plt.close()
        else:
            plt.show()

    def plot_best_fitness(self, save_path=None):
        """
        Plot the best population fitness and the best solution cost across generations, one line per run.
        """
        if not self.data:
            print("No fitness history files found to visualize.")
            return

        plt.figure(figsize=(10, 6))
        for run_name, df in self.data.items():
            plt.plot(df['generation'], df['best_fitness'], linestyle='-', label=f'{run_name} best fitness')
            plt.plot(df['generation'], df['best_cost'], linestyle='--', label=f'{run_name} best solution')

        plt.title('Best Fitness Across Generations')
        plt.xlabel('Generation')
        plt.ylabel('Fitness')
        plt.legend()
        plt.grid(True)
        self._finish(save_path)

    def plot_average_fitness(self, save_path=None):
        """
        Plot the mean fitness with a one standard deviation band across generations.
        """
        if not self.data:
            print("No fitness history files found to visualize.")
            return

        plt.figure(figsize=(10, 6))
        for run_name, df in self.data.items():
            plt.plot(df['generation'], df['mean_fitness'], marker='o', linestyle='-', label=run_name)
            plt.fill_between(df['generation'],
                             df['mean_fitness'] - df['std_fitness'],
                             df['mean_fitness'] + df['std_fitness'],
                             alpha=0.2)

        plt.title('Average Fitness Across Generations')
        plt.xlabel('Generation')
        plt.ylabel('Average Fitness')
        plt.legend()
        plt.grid(True)
        self._finish(save_path)

    def summary(self):
        """Final best cost, generations and duration per run."""
        rows = []
        for run_name, df in self.data.items():
            last = df.iloc[-1]
            rows.append({'run': run_name,
                         'generations': int(last['generation']),
                         'best_cost': last['best_cost'],
                         'elapsed_seconds': last['elapsed_seconds']})
        return pd.DataFrame(rows, columns=['run', 'generations', 'best_cost', 'elapsed_seconds'])


#visualiser = EvolutionVisualizer("ga_results")
#visualiser.plot_best_fitness()
#visualiser.plot_average_fitness()
#print(visualiser.summary())
